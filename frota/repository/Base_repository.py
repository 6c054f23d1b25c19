"""Infraestrutura simples de repositórios baseada em SQLAlchemy."""

from __future__ import annotations

from typing import Any, List, Optional, Type

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from frota.app import db
from frota.utils.logs import logger


class BaseRepo:
    """Leitura em bloco e escrita com tratamento de erros consistente.

    Falhas de leitura são propagadas: quem consome estes dados (alertas,
    permissões) não pode confundir uma base indisponível com uma tabela vazia.
    """

    def __init__(self, model: Type[Any], session: Optional[Session] = None) -> None:
        self.model = model
        self.session = session or db.session

    def _commit(self, commit: bool) -> None:
        if commit:
            self.session.commit()
        else:
            self.session.flush()

    def list_all(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[Any]:
        query = self.session.query(self.model).order_by(self.model.id)
        if offset:
            query = query.offset(offset)
        if limit:
            query = query.limit(limit)
        try:
            return query.all()
        except SQLAlchemyError:
            logger.exception("Erro ao listar %s", self.model.__name__)
            raise

    def add(self, obj: Any, commit: bool = True) -> Any:
        try:
            self.session.add(obj)
            self._commit(commit)
            return obj
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("Erro ao adicionar %s", self.model.__name__)
            raise
