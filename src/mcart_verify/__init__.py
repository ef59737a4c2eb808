"""mcart verify - cartridge, palette and bundle checks."""
