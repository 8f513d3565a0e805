from __future__ import annotations

from leadfinder.models import RawLead


class Deduplicator:
    def __init__(self) -> None:
        self.seen_ids: set[str] = set()

    def split_new_and_seen(self, leads: list[RawLead]) -> tuple[list[RawLead], list[RawLead]]:
        new_leads: list[RawLead] = []
        skipped: list[RawLead] = []

        for lead in leads:
            if lead.id in self.seen_ids:
                skipped.append(lead)
                continue
            self.seen_ids.add(lead.id)
            new_leads.append(lead)

        return new_leads, skipped
