from typing import Iterable, List, Optional

from sqlalchemy import select

from persona_chat.database.daos.base_dao import BaseDao
from persona_chat.database.entities import PersonaEntity
from persona_chat.database.records import Category, Persona, persona_matches


def to_persona(entity: PersonaEntity) -> Persona:
    return Persona(
        id=entity.id,
        name=entity.name,
        lifespan=entity.lifespan,
        category=Category(entity.category),
        description=entity.description,
        image_url=entity.image_url,
    )


class PersonaDao(BaseDao):
    """Persona catalog backed by the `personas` table."""

    def seed(self, personas: Iterable[Persona]) -> int:
        """
        Insert personas whose id is not present yet.

        Returns
        -------
        int
            Number of personas inserted.
        """
        added = 0
        with self.unit_of_work() as db:
            for persona in personas:
                if db.get(PersonaEntity, persona.id) is not None:
                    continue
                db.add(PersonaEntity(
                    id=persona.id,
                    name=persona.name,
                    lifespan=persona.lifespan,
                    category=Category(persona.category).value,
                    description=persona.description,
                    image_url=persona.image_url,
                ))
                added += 1
            db.commit()
        return added

    def list_all(self) -> List[Persona]:
        with self.unit_of_work() as db:
            rows = db.scalars(select(PersonaEntity).order_by(PersonaEntity.id)).all()
            return [to_persona(row) for row in rows]

    def list_by_category(self, category: str) -> List[Persona]:
        with self.unit_of_work() as db:
            rows = db.scalars(
                select(PersonaEntity)
                .where(PersonaEntity.category == category)
                .order_by(PersonaEntity.id)
            ).all()
            return [to_persona(row) for row in rows]

    def search(self, query: str) -> List[Persona]:
        """Personas whose name or description contains `query`, ignoring case."""
        if not query or not query.strip():
            return self.list_all()
        # SQL lower() only folds ASCII; match in Python so both backends agree
        return [persona for persona in self.list_all() if persona_matches(persona, query)]

    def get_by_id(self, persona_id: int) -> Optional[Persona]:
        with self.unit_of_work() as db:
            row = db.get(PersonaEntity, persona_id)
            return to_persona(row) if row is not None else None
