from sqlbind.utils import logging, module_loader, schema, type_guards

__all__ = ("logging", "module_loader", "schema", "type_guards")
