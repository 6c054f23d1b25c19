"""Repositório da tabela de permissões (papel, recurso, ação)."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, List, Optional

from sqlalchemy import String, type_coerce
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from frota.models.Permissions import Action, PermissionRule, Resource, Role
from frota.repository.Base_repository import BaseRepo
from frota.utils.logs import logger


class PermissionRepo(BaseRepo):
    """Leitura em bloco e escrita linha a linha, chave única (role, resource, action)."""

    def __init__(self, session: Optional[Session] = None):
        super().__init__(PermissionRule, session=session)

    def list_rules(self) -> List[Any]:
        """Todas as linhas, com as chaves lidas como texto.

        A tabela é partilhada com o backend de dados, que pode ter gravado
        chaves que os enums não conhecem; cabe a quem carrega decidir o que
        fazer com elas, em vez de a leitura inteira falhar.
        """

        table = self.model.__table__
        query = self.session.query(
            type_coerce(table.c.role, String).label("role"),
            type_coerce(table.c.resource, String).label("resource"),
            type_coerce(table.c.action, String).label("action"),
            table.c.allowed,
            table.c.updated_at,
        ).order_by(table.c.role, table.c.resource, table.c.action)
        try:
            return query.all()
        except SQLAlchemyError:
            logger.exception("Erro ao carregar tabela de permissões")
            raise

    def get_by_key(self, role: Role, resource: Resource, action: Action) -> Optional[PermissionRule]:
        return (
            self.session.query(self.model)
            .filter_by(role=role, resource=resource, action=action)
            .one_or_none()
        )

    def upsert(
        self,
        role: Role,
        resource: Resource,
        action: Action,
        allowed: bool,
        *,
        updated_at: Optional[datetime] = None,
        commit: bool = True,
    ) -> PermissionRule:
        """Cria ou substitui a linha da chave e devolve-a tal como ficou gravada."""

        stamp = updated_at or datetime.now(timezone.utc)
        try:
            try:
                rule = self._write(role, resource, action, allowed, stamp, commit)
            except IntegrityError:
                # outra escrita criou a mesma chave entre a leitura e o insert
                logger.warning(
                    "Conflito ao inserir permissão %s:%s:%s, a repetir como update",
                    role, resource, action,
                )
                rule = self._write(role, resource, action, allowed, stamp, commit)
            if commit:
                self.session.refresh(rule)
            return rule
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("Erro ao gravar permissão %s:%s:%s", role, resource, action)
            raise

    def _write(self, role, resource, action, allowed, stamp, commit) -> PermissionRule:
        rule = self.get_by_key(role, resource, action)
        if rule is None:
            rule = PermissionRule(role=role, resource=resource, action=action)
        rule.allowed = bool(allowed)
        rule.updated_at = stamp
        return self.add(rule, commit=commit)
