"""Protocol layer: attribute handles, fixed layouts, and response decoding."""

from .handles import Handle, REALTIME_ENABLE_PAYLOAD, requires_realtime_enable
from .parser import decode_firmware, decode_sensors
