"""hcvcoloc CLI — command-line front end."""
