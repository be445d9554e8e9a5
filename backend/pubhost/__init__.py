"""pubhost — authenticated HTML document hosting over a flat object store."""

__version__ = "0.1.0"
