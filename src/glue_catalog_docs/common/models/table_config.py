"""
Catalog table models using Pydantic for validation.
"""

from typing import Dict, List, Optional, Any
from datetime import datetime
from pydantic import BaseModel, Field, field_validator


NESTED_TYPE_PREFIXES = ("struct<", "array<", "map<")


class CatalogColumn(BaseModel):
    """A column or partition key of a catalog table."""
    name: str = Field(..., description="Column name")
    type: Optional[str] = Field(None, description="Catalog type string, e.g. 'array<string>'")
    comment: Optional[str] = Field(None, description="Column comment")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("Column name must not be empty")
        return v

    @classmethod
    def from_glue(cls, data: Dict[str, Any]) -> 'CatalogColumn':
        """Build a column from a Glue ``Column`` structure."""
        return cls(
            name=data.get('Name', ''),
            type=data.get('Type'),
            comment=data.get('Comment')
        )


class CatalogTable(BaseModel):
    """Table definition as returned by the catalog service."""
    name: str = Field(..., description="Table name")
    database_name: str = Field(..., description="Database the table belongs to")
    partition_keys: List[CatalogColumn] = Field(default_factory=list, description="Partition key columns")
    columns: List[CatalogColumn] = Field(default_factory=list, description="Storage descriptor columns")

    # Optional metadata
    description: Optional[str] = Field(None, description="Table description")
    table_type: Optional[str] = Field(None, description="Table type, e.g. EXTERNAL_TABLE")
    location: Optional[str] = Field(None, description="Storage location")
    owner: Optional[str] = Field(None, description="Table owner")
    create_time: Optional[datetime] = Field(None, description="Creation time")
    update_time: Optional[datetime] = Field(None, description="Last update time")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("Table name must not be empty")
        return v

    @classmethod
    def from_glue(cls, data: Dict[str, Any]) -> 'CatalogTable':
        """
        Build a table from one entry of a Glue ``TableList``.

        A table without a storage descriptor (e.g. a view) has no columns.
        """
        storage = data.get('StorageDescriptor') or {}
        return cls(
            name=data.get('Name', ''),
            database_name=data.get('DatabaseName', ''),
            partition_keys=[CatalogColumn.from_glue(c) for c in data.get('PartitionKeys') or []],
            columns=[CatalogColumn.from_glue(c) for c in storage.get('Columns') or []],
            description=data.get('Description'),
            table_type=data.get('TableType'),
            location=storage.get('Location'),
            owner=data.get('Owner'),
            create_time=data.get('CreateTime'),
            update_time=data.get('UpdateTime')
        )

    @property
    def filename(self) -> str:
        """Name of the Markdown document generated for this table."""
        return f"{self.name}.md"

    @property
    def column_count(self) -> int:
        """Number of storage columns, partition keys excluded."""
        return len(self.columns)

    def to_summary(self) -> 'TableSummary':
        return TableSummary(name=self.name, link=self.filename, column_count=self.column_count)

    def to_page(self) -> 'TablePage':
        return TablePage(
            database_name=self.database_name,
            table_name=self.name,
            partition_keys=self.partition_keys,
            columns=self.columns,
            description=self.description,
            table_type=self.table_type,
            location=self.location,
            owner=self.owner,
            create_time=self.create_time,
            update_time=self.update_time
        )


class TableSummary(BaseModel):
    """One row of the table-of-contents index."""
    name: str = Field(..., description="Table name")
    link: str = Field(..., description="Generated document filename")
    column_count: int = Field(0, ge=0, description="Number of columns in the table")


class TablePage(BaseModel):
    """Template parameters for a single table document."""
    database_name: str
    table_name: str
    partition_keys: List[CatalogColumn] = Field(default_factory=list)
    columns: List[CatalogColumn] = Field(default_factory=list)
    description: Optional[str] = None
    table_type: Optional[str] = None
    location: Optional[str] = None
    owner: Optional[str] = None
    create_time: Optional[datetime] = None
    update_time: Optional[datetime] = None


class IndexPage(BaseModel):
    """Template parameters for the table-of-contents document."""
    project_name: str
    database_name: Optional[str] = None
    tables: List[TableSummary] = Field(default_factory=list)
