"""Design-token code generation for web, iOS and Android."""

__version__ = "0.4.0"
