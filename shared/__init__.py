"""Building blocks shared by every backend variant and the frontend."""
