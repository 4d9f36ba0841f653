"""schemer -- List the paths, operations, and schemas of multi-file OpenAPI specs.

OpenAPI documents are often split across several files that point at each
other with ``$ref``. This package walks such a document tree key by key and
follows every external ``$ref`` it meets, so that the structural content can
be listed without first bundling the spec into a single file.

Typical workflow::

    schemer path list openapi.yaml
    schemer operation list openapi.yaml --json
    schemer schema list openapi.yaml

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models shared across the package.
    config: XDG-aware configuration and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
    parser: Document parsing, key lookups, and ``$ref`` content resolution.
    walker: The path, operation, and schema walkers.
"""

__version__ = "0.3.0"
