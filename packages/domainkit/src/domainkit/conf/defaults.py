"""Default configuration values for domainkit."""

DEFAULTS: dict[str, object] = {
    # Zero-pad width for the trailing counter of generated test IDs
    # ("PO-EXP-001-TEST-1" with 0, "PO-EXP-001-TEST-001" with 3).
    "TEST_ID_PADDING": 0,
    # Zero-pad width for generated expectation IDs; the ID format requires >= 3.
    "EXPECTATION_ID_PADDING": 3,
    # Decorator span attribute filtering: "debug" | "info" | "minimal".
    "TRACE_LEVEL": "info",
    # Log a warning when a name is registered twice in a last-write-wins registry.
    "WARN_ON_DUPLICATES": True,
}
