"""Pure analytics functions over immutable workout snapshots."""
