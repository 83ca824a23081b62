"""QuickChoice command-line front end."""
