from typing import Dict, List
from pydantic import BaseModel, computed_field
from quakeinsight.utils.yaml import load_config_from_yaml


class TableSchema(BaseModel):
    columns: Dict[str, str]
    primary_key: List[str]

    @computed_field
    @property
    def duckdb_schema(self) -> str:
        return ", ".join([f"{col} {type}" for col, type in self.columns.items()])

    @computed_field
    @property
    def duckdb_pk(self) -> str:
        return ", ".join(self.primary_key)

    def column_type(self, col: str) -> str:
        # "VARCHAR NOT NULL" -> "VARCHAR"
        return self.columns[col].split()[0]

    def writable_columns(self) -> List[str]:
        """Columns the application writes; columns with a DEFAULT are left to the database."""
        return [
            col
            for col, type in self.columns.items()
            if "DEFAULT" not in type.upper()
        ]


class SchemaConfig(BaseModel):
    schemas: Dict[str, TableSchema]

    @staticmethod
    def from_yaml(path: str) -> "SchemaConfig":
        data_dict = load_config_from_yaml(path)
        return SchemaConfig.model_validate(data_dict)
