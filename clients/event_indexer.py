import time
from typing import List

from clients.models import Event
from clients.starklens import StarklensClient
from clients.voyager import VoyagerClient
from storage.event_store import EventStore

IDLE = "IDLE"
FETCHING = "FETCHING"


class VoyagerEventIndexer:
    def __init__(
        self,
        voyager_client: VoyagerClient,
        starklens_client: StarklensClient,
        event_store: EventStore,
        contract_address: str
    ):
        self.voyager_client = voyager_client
        self.starklens_client = starklens_client
        self.event_store = event_store
        self.contract_address = contract_address
        self.state = IDLE

        print(f"VoyagerEventIndexer initialized for contract: {contract_address}")

    def collect_new_events(self) -> List[Event]:
        """Walk every feed page and store the events not seen before.

        Returns the new events in feed order, newest first.
        """
        page = 1
        collected: List[Event] = []

        while True:
            response = self.voyager_client.fetch_page(self.contract_address, page)

            new_on_page = 0
            for event in response.items:
                if not self.event_store.exists(event.event_id):
                    self.event_store.put(event)
                    collected.append(event)
                    new_on_page += 1

            print(f"Page {page}/{response.last_page}: {new_on_page} new of {len(response.items)} events")

            # lastPage is re-read on every fetch so pages added mid-cycle are still walked
            if page >= response.last_page:
                break
            page += 1

        return collected

    def restore_chronological_order(self, events: List[Event]) -> List[Event]:
        """
        Turn the newest-first feed order into ascending chain order.

        Voyager lists the newest events first and page 1 is the newest page,
        so reversing the collected sequence yields ascending block numbers.
        If the feed ever breaks that ordering the batch is sorted by block
        number instead, since Starklens expects increasing recency.
        """
        events.reverse()

        if any(prev.block_number > curr.block_number for prev, curr in zip(events, events[1:])):
            print("Warning: Voyager events were not newest-first, sorting batch by block number")
            events.sort(key=lambda event: event.block_number)

        return events

    def process_new_events(self) -> int:
        """Run one ingestion cycle and return how many events were forwarded"""
        events = self.collect_new_events()

        if not events:
            print("No new events found")
            return 0

        print(f"Found {len(events)} new events")
        self.restore_chronological_order(events)
        self.starklens_client.send(events)

        return len(events)

    def run_event_processor(self, poll_interval: int = 20):
        """Main loop to continuously check for new events"""
        print(f"Starting event processor, polling every {poll_interval}s")

        while True:
            self.state = FETCHING
            print("Polling Voyager API...")
            self.process_new_events()

            self.state = IDLE
            time.sleep(poll_interval)
