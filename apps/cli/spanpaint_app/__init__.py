"""spanpaint command line application."""
