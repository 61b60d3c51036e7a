"""Release metadata shared by the publishing adapters."""
