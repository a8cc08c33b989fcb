"""Database models for tooltip-taxonomy using Peewee ORM."""

import json
from datetime import datetime

from peewee import (
    AutoField,
    BooleanField,
    CharField,
    DatabaseProxy,
    DateTimeField,
    ForeignKeyField,
    IntegerField,
    Model,
    TextField,
)

from tooltip_taxonomy.entities import (
    Condition,
    ContentTypeRule,
    PathRule,
    TaxonomyTerm,
)
from tooltip_taxonomy.exceptions import DatabaseError

# Database proxy that will be initialized by manager
db_proxy = DatabaseProxy()


class ListField(TextField):
    """List of strings stored as JSON text."""

    def db_value(self, value):
        return json.dumps(list(value or []))

    def python_value(self, value):
        return json.loads(value) if value else []


class BaseModel(Model):
    """Base model with common fields."""

    class Meta:
        database = db_proxy


class Vocabulary(BaseModel):
    """A named group of taxonomy terms."""

    vid = CharField(max_length=32, primary_key=True)
    name = CharField(max_length=255)

    class Meta:
        table_name = "vocabularies"


class Term(BaseModel):
    """Taxonomy term with a rich-text description."""

    tid = AutoField()
    vocabulary = ForeignKeyField(Vocabulary, backref="terms", on_delete="CASCADE")
    name = CharField(max_length=255, index=True)
    description = TextField(default="")
    weight = IntegerField(default=0)

    class Meta:
        table_name = "taxonomy_terms"

    def to_entity(self) -> TaxonomyTerm:
        return TaxonomyTerm(
            tid=self.tid,
            vid=self.vocabulary_id,
            name=self.name,
            description=self.description,
            weight=self.weight,
        )


class FilterCondition(BaseModel):
    """Stored tooltip condition."""

    cid = CharField(max_length=64, primary_key=True)
    label = CharField(max_length=255, default="")
    weight = IntegerField(default=0, index=True)
    path_pages = TextField(default="")  # one pattern per line
    path_negate = BooleanField(default=False)
    content_types = ListField(default=list)
    view_modes = ListField(default=list)
    formats = ListField(default=list)
    field_keys = ListField(default=list)  # entityType-fieldName
    vids = ListField(default=list)
    created_at = DateTimeField(default=datetime.now)

    class Meta:
        table_name = "filter_conditions"

    def to_entity(self) -> Condition:
        path = PathRule.from_text(self.path_pages, self.path_negate)
        return Condition(
            id=self.cid,
            label=self.label,
            weight=self.weight,
            path=None if path.is_empty else path,
            content_types=ContentTypeRule(frozenset(self.content_types)),
            view_modes=frozenset(self.view_modes),
            formats=frozenset(self.formats),
            fields=frozenset(self.field_keys),
            vocabularies=tuple(self.vids),
        )

    @classmethod
    def from_entity(cls, condition: Condition) -> "FilterCondition":
        """Insert or replace the row for ``condition``."""
        path = condition.path or PathRule()
        row = cls(
            cid=condition.id,
            label=condition.label,
            weight=condition.weight,
            path_pages="\n".join(path.pages),
            path_negate=path.negate,
            content_types=sorted(condition.content_types.bundles),
            view_modes=sorted(condition.view_modes),
            formats=sorted(condition.formats),
            field_keys=sorted(condition.fields),
            vids=list(condition.vocabularies),
        )
        row.save(force_insert=not cls.select().where(cls.cid == condition.id).exists())
        return row


MODELS = [Vocabulary, Term, FilterCondition]


def create_tables() -> None:
    """Create all database tables."""
    if db_proxy.obj is None:
        raise DatabaseError("Database not initialized")
    db_proxy.create_tables(MODELS, safe=True)
