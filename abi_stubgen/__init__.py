"""
abi_stubgen — versioned stub generator for symbol-baseline manifests.

Reads a libstdc++-style ``baseline_symbols.txt`` and emits an assembly
source of empty stubs plus a linker version script.
"""

__version__ = "0.1.0"
GENERATOR_VERSION = "v0"
PACKAGE_NAME = "abi_stubgen"
SCHEMA_VERSION = "0.1"
