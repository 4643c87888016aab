"""
data_profiler -- Format normalization and field inference for tabular sources.

Turns delimited text, fixed-width text, spreadsheets, JSON, and XML into one
header row plus a record matrix, then profiles every column: semantic type,
optional pattern, maximum rendered length, optional uniqueness, examples.

Architecture:
    adapters/  -- one SourceAdapter per format (no validation, no inference)
    domain/    -- pure types, coercion, validators, field inference
    services/  -- AnalysisService: adapter registry, validation, sampling,
                  result assembly
    config.py  -- YAML options files
    cli.py     -- ``data-profiler analyze`` front end
"""

__version__ = "1.0.0"
