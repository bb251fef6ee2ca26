REQUIRED_FIELDS = ["id", "scheduleUrl", "recapUrl", "groups"]


def validate_enriched_event(record):
    """
    Check that an enriched event record has its fields and never mixes an error with data.
    """
    for name in REQUIRED_FIELDS:
        if name not in record:
            return False
    if record.get("id") is None:
        return False
    if record.get("error"):
        return record["scheduleUrl"] is None and not record["recapUrl"] and not record["groups"]
    return isinstance(record["groups"], list)
