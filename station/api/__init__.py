"""HTTP quoting surface for Station pools."""
