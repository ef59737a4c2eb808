"""mcart compile - manifest to cartridge compiler and bundle packager."""
