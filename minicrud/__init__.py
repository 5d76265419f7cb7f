"""Mini CRUD de usuarios: FastAPI sobre um arquivo JSON."""
