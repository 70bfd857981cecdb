"""configlint: schema-validated config files with compiler-style diagnostics."""

__version__ = "0.1.0"
