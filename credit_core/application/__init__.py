"""Application layer: async use cases over the domain and its ports."""
