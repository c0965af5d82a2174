"""Services for IdeaForge."""
