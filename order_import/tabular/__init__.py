"""File decoding and tabular parsing (CSV / Excel)."""
