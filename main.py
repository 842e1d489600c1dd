# Point d'entrée : uvicorn main:app  (équivalent à uvicorn app.main:app)
from app.main import app  # noqa: F401
