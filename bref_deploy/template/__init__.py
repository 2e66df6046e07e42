"""Files installed into new projects and into the build output."""
