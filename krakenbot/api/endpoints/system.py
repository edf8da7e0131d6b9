from krakenbot.api.types import ServerTime, SystemStatus

TIME_ENDPOINT = "/0/public/Time"
SYSTEM_STATUS_ENDPOINT = "/0/public/SystemStatus"


def get_server_time(client) -> ServerTime:
    return client.public_request(TIME_ENDPOINT)


def get_system_status(client) -> SystemStatus:
    """État de l'exchange : online | maintenance | cancel_only | post_only."""
    return client.public_request(SYSTEM_STATUS_ENDPOINT)


def run_time(client):
    t = get_server_time(client) or {}
    print(f"🕒 {t.get('rfc1123')} ({t.get('unixtime')})")


def run_status(client):
    s = get_system_status(client) or {}
    print(f"📡 Kraken: {s.get('status')} @ {s.get('timestamp')}")
