# Shared helpers: failure reasons, validation, step records, logging
