"""python-dotenv backed decoder."""
