"""Small pure helpers shared by the replay services."""
