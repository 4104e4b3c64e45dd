"""HazardFusion realtime package — broadcast envelopes and channel routing."""

from hazardfusion.realtime.broadcast import (
    GLOBAL_CHANNEL,
    BroadcastEvent,
    BroadcastMessage,
    alert_channels,
    build_alert_message,
    build_report_message,
    build_system_notification,
    messages_for_fusion_result,
    report_channels,
)

__all__ = [
    "GLOBAL_CHANNEL",
    "BroadcastEvent",
    "BroadcastMessage",
    "alert_channels",
    "report_channels",
    "build_alert_message",
    "build_report_message",
    "build_system_notification",
    "messages_for_fusion_result",
]
