from .telegram import format_fim_alert, select_alert_event, send_fim_alert, send_message

__all__ = ["format_fim_alert", "select_alert_event", "send_fim_alert", "send_message"]
