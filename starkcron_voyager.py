import sys

from clients.event_indexer import VoyagerEventIndexer
from clients.starklens import StarklensClient
from clients.voyager import VoyagerClient
from config.settings import Settings
from storage.event_store import EventStore


def _print_fatal(error: BaseException):
    print(f"Fatal error: {error}", file=sys.stderr)
    cause = error.__cause__
    while cause is not None:
        print(f"  caused by: {cause}", file=sys.stderr)
        cause = cause.__cause__


def main() -> int:
    try:
        settings = Settings()

        # Long-lived handles, created once and owned by the indexer for the process lifetime
        event_store = EventStore.open(settings.db_path)
        voyager_client = VoyagerClient(
            api_key=settings.voyager_api_key,
            base_url=settings.voyager_api_url,
            timeout=settings.request_timeout
        )
        starklens_client = StarklensClient(
            base_url=settings.starklens_api_url,
            timeout=settings.request_timeout
        )

        indexer = VoyagerEventIndexer(
            voyager_client=voyager_client,
            starklens_client=starklens_client,
            event_store=event_store,
            contract_address=settings.contract_address
        )

        # Run the event processor (this will block)
        indexer.run_event_processor(poll_interval=settings.poll_interval)
    except KeyboardInterrupt:
        print("Event processor stopped")
        return 0
    except Exception as e:
        _print_fatal(e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
