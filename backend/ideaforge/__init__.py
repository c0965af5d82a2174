"""IdeaForge backend: provider gateways and the JSON API around them."""
