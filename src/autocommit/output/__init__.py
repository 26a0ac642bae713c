"""Console output — Rich-styled status lines for the CLI."""
