"""Cross-cutting helpers shared by the Folderview surfaces."""
