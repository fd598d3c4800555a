# app/models/__init__.py
# app.db.base define Base e importa todos os models; qualquer import de
# app.models.* passa por aqui primeiro, então o metadata sempre fica completo.
from app.db.base import Base  # noqa: F401

__all__: list[str] = ["Base"]
