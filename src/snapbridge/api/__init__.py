"""HTTP trigger surface for snap operations."""
