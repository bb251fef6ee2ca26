from dataclasses import dataclass, field


@dataclass
class SeasonMetrics:
    """Track scraping metrics for each season."""
    name: str
    event_count: int = 0
    failed_events: int = 0
    groups_scraped: int = 0
    groups_matched: int = 0
    errors: int = 0
    error_messages: list = field(default_factory=list)
    duration_ms: float = 0.0

    def record_events(self, records):
        self.event_count = len(records)
        for record in records:
            if record.get("error"):
                self.failed_events += 1
                self.error_messages.append(f"{record.get('id')}: {record['error']}")
                continue
            groups = record.get("groups") or []
            self.groups_scraped += len(groups)
            self.groups_matched += sum(1 for g in groups if g.get("groupId"))
