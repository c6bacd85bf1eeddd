"""vaultgraph - parse markdown vaults into addressable object graphs."""

__version__ = "0.1.0"
