"""
Created on 2026-10-12

@author: wf
"""
import json
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple

MIN_LIMIT = 1
MAX_LIMIT = 500


class FieldResolver:
    """
    resolve a value from the first present of an ordered list of field names
    """

    def __init__(self, *names: str):
        self.names = names

    def resolve(self, record: Dict[str, Any], default: Any = None) -> Any:
        """
        Args:
            record: the record to look up
            default: value to return if none of the fields is present

        Returns:
            the first non-empty value found
        """
        for name in self.names:
            value = record.get(name)
            if value is not None and value != "":
                return value
        return default


DEVICE_NAME_FIELDS = FieldResolver("device_name", "device", "deviceName")
TIMESTAMP_FIELDS = FieldResolver("timestamp", "created_at", "createdAt")


def device_name(record: Any) -> Optional[str]:
    """
    get the name of the given device record
    """
    if isinstance(record, str):
        name = record
    elif isinstance(record, dict):
        name = DEVICE_NAME_FIELDS.resolve(record)
    else:
        name = None
    if name is None or name == "":
        return None
    return str(name)


def device_names(records: Iterable[Any]) -> Tuple[str, ...]:
    """
    normalize the given device records to a tuple of unique names
    keeping the order of first appearance
    """
    names = []
    for record in records:
        name = device_name(record)
        if name is not None and name not in names:
            names.append(name)
    return tuple(names)


def clamp_limit(value: Any) -> int:
    """
    clamp the given row limit input to [MIN_LIMIT, MAX_LIMIT]

    non numeric, zero and NaN inputs resolve to MIN_LIMIT
    """
    try:
        number = float(value)
    except (TypeError, ValueError):
        return MIN_LIMIT
    if math.isnan(number) or number == 0:
        return MIN_LIMIT
    if math.isinf(number):
        return MAX_LIMIT if number > 0 else MIN_LIMIT
    return max(MIN_LIMIT, min(MAX_LIMIT, int(number)))


def parse_payload(payload: Any) -> Any:
    """
    parse a JSON payload string - keep the raw string if it is not valid JSON
    """
    if isinstance(payload, str):
        try:
            return json.loads(payload)
        except ValueError:
            return payload
    return payload


def parse_timestamp(value: Any) -> Any:
    """
    parse the given timestamp

    Args:
        value: ISO-8601 string or epoch milliseconds

    Returns:
        a datetime or the unchanged value if it can't be parsed
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return value
    if isinstance(value, str):
        iso = value.strip()
        if iso.endswith(("Z", "z")):
            iso = iso[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(iso)
        except ValueError:
            return value
    return value


def format_timestamp(timestamp: Any) -> str:
    """
    render the given timestamp in local time
    """
    if timestamp is None or timestamp == "":
        return "-"
    if isinstance(timestamp, datetime):
        # naive datetimes are taken as local time
        try:
            return timestamp.astimezone().strftime("%Y-%m-%d %H:%M:%S")
        except (OverflowError, ValueError, OSError):
            return timestamp.isoformat()
    return str(timestamp)


@dataclass(frozen=True)
class Reading:
    """
    a single sensor reading of a device
    """

    topic: str = ""
    payload: Any = None
    payload_raw: Optional[str] = None
    timestamp: Any = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Reading":
        """
        create a reading from a record as returned by the device data endpoint
        """
        topic = record.get("topic")
        return cls(
            topic="" if topic is None else str(topic),
            payload=parse_payload(record.get("payload_json")),
            payload_raw=record.get("payload_raw"),
            timestamp=parse_timestamp(TIMESTAMP_FIELDS.resolve(record)),
        )

    @property
    def payload_text(self) -> str:
        if self.payload is None or self.payload == "":
            return "-"
        return json.dumps(self.payload, indent=2)

    @property
    def local_time(self) -> str:
        return format_timestamp(self.timestamp)

    def as_row(self, index: int) -> Dict[str, Any]:
        """
        get a table row for this reading

        Args:
            index: 1-based position in the reading list
        """
        row = {
            "#": index,
            "topic": self.topic,
            "payload": self.payload_text,
            "raw": self.payload_raw or "-",
            "timestamp": self.local_time,
        }
        return row


def readings_from_response(response: Dict[str, Any]) -> Tuple[Reading, ...]:
    """
    get the readings of a device data response
    """
    records: List[Any] = response.get("data") or []
    if not isinstance(records, list):
        raise ValueError(f"data must be a list of readings not {type(records).__name__}")
    readings = tuple(
        Reading.from_record(record) for record in records if isinstance(record, dict)
    )
    return readings
