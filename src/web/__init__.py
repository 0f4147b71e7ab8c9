"""HTTP surface for the access and attribution core."""
