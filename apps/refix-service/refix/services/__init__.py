"""Services built on top of the repositories: catalog editing and migration."""
