"""
Shared, cross-cutting code for the API.

`core/` should contain small building blocks that multiple features use
(DB handles, error envelopes, parameter parsing, logging, the PDF renderer
client). Keep feature-specific SQL and business logic in the corresponding
feature package (e.g. `stool/`).
"""
