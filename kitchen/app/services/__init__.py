"""Service layer sitting between the routes and the repositories."""
