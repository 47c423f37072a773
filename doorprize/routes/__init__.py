"""HTTP routes (controllers). No business logic here."""
