"""Commands installed by the shopify scope."""
