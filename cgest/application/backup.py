"""
Backup export / restore of all collections.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from pydantic import TypeAdapter

from cgest.domain.client import Client
from cgest.domain.goal import Goal
from cgest.domain.payment import Payment
from cgest.domain.project import Project
from cgest.domain.task import Task
from cgest.infrastructure.storage.repository import BACKEND_LOCAL, Storage

logger = logging.getLogger(__name__)

_ADAPTERS = {
    "clients": TypeAdapter(List[Client]),
    "projects": TypeAdapter(List[Project]),
    "tasks": TypeAdapter(List[Task]),
    "payments": TypeAdapter(List[Payment]),
    "goals": TypeAdapter(List[Goal]),
}


class BackupService:
    def __init__(self, storage: Storage):
        self.storage = storage

    def export(self) -> Dict[str, Any]:
        """JSON-ready snapshot of every collection plus a timestamp."""
        stores = self.storage.collections()
        data: Dict[str, Any] = {
            name: adapter.dump_python(stores[name].list(), mode="json")
            for name, adapter in _ADAPTERS.items()
        }
        data["timestamp"] = datetime.now(timezone.utc).isoformat()
        return data

    def restore(self, backup: Dict[str, Any]) -> bool:
        """
        Replace collections present in `backup`.

        Só no backend local: no banco hospedado a restauração é recusada
        (retorna False) para não sobrescrever dados de produção.
        """
        if self.storage.backend != BACKEND_LOCAL:
            logger.warning(
                "Backup restore refused on %s backend (account_id=%s)",
                self.storage.backend, self.storage.account_id,
            )
            return False

        stores = self.storage.collections()
        for name in _ADAPTERS:
            if backup.get(name) is not None:
                stores[name].replace_all(backup[name])
        logger.info("Backup restored for account_id=%s", self.storage.account_id)
        return True
