from datasource_sdk.inspector.schema import SchemaInspector

__all__ = ["SchemaInspector"]
