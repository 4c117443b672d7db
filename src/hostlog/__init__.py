"""hostlog — host-environment enrichers for structlog.

Attaches host application metadata (installation path, raw version, version
name, process bitness) to every structured log event, computing each value
once per process and never overwriting a property the call site already set.

Typical usage:

    from hostlog.pipeline import EnrichmentBuilder

    pipeline = (
        EnrichmentBuilder()
        .with_host_path()
        .with_host_version()
        .with_host_version_name()
        .with_host_bitness()
        .build()
    )
    configure_logging(pipeline=pipeline)
"""

__version__ = "0.1.0"
