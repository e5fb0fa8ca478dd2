# expense_ledger/outputs/__init__.py
from importlib import import_module

def get_output(name, config):
    """Instantiate the exporter registered under *name* in ``output_modules``."""
    modules = config.get('output_modules', {})
    if name not in modules:
        known = ', '.join(sorted(modules)) or 'none'
        raise ValueError(f"Unknown output '{name}' (configured: {known})")
    module_name, cls_name = modules[name].rsplit('.', 1)
    return getattr(import_module(module_name), cls_name)(config)
