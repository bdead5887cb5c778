"""Client repository - Database operations for clients"""

from typing import Optional

from sqlalchemy import func, or_

from ...models import Client
from ...shared.repository import Repository


class ClientRepository(Repository[Client]):
    model = Client

    def search(self, term: Optional[str] = None) -> list[Client]:
        """Clients newest first, optionally narrowed by name, ID number or phone"""
        criteria = []
        if term and term.strip():
            pattern = f"%{term.strip().lower()}%"
            criteria.append(
                or_(
                    func.lower(Client.name).like(pattern),
                    func.lower(Client.id_number).like(pattern),
                    func.lower(Client.phone).like(pattern),
                )
            )
        return self.find(*criteria, order_by=(Client.created_at.desc(), Client.name))
