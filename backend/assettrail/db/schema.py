"""Database schema DDL. All tables use CREATE IF NOT EXISTS for idempotency."""

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS asset_events (
    event_id INTEGER PRIMARY KEY AUTOINCREMENT,
    serial_number TEXT NOT NULL,
    event_date TEXT NOT NULL,
    status TEXT NOT NULL,
    current_name TEXT NOT NULL,
    renamed_from TEXT NOT NULL,
    renamed_to TEXT NOT NULL,
    manufacture TEXT NOT NULL,
    model TEXT NOT NULL,
    description TEXT NOT NULL,
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_asset_events_serial_order
    ON asset_events(serial_number, event_date, event_id);
"""
