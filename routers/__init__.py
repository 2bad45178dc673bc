"""HTTP routers for the Student Helper API."""
