"""Code generation: virtual locale modules and dispatch rewrites.

Exports:
    ModuleSynthesizer: Prints one module per (locale, scope)
    DispatchGenerator: Rewrites extraction points into dispatch code
    virtual_module_id, parse_virtual_module_id: Virtual module id codec

Python 3.13+.
"""

from .dispatch import DispatchGenerator, generated_name
from .synthesizer import ModuleSynthesizer, parse_virtual_module_id, virtual_module_id

__all__ = [
    "DispatchGenerator",
    "ModuleSynthesizer",
    "generated_name",
    "parse_virtual_module_id",
    "virtual_module_id",
]
