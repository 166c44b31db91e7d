"""Event-style logger used throughout the chat client."""

from __future__ import annotations

import logging
import os


class ChatLogger:
    """Thin wrapper over a stdlib logger that emits ``domain_action`` events.

    Rendering (colors, timestamps) is left to the handlers installed by
    :class:`twitch_chat.logging_config.LoggerConfigurator`.
    """

    def __init__(self, name: str = "twitch_chat") -> None:
        # Fixed width for event name column when in debug (alignment)
        self._event_name_width = 32
        self.logger = logging.getLogger(name)

    def log_event(
        self,
        domain: str,
        action: str,
        level: int = logging.INFO,
        human: str | None = None,
        *,
        exc_info: bool = False,
        **kwargs: object,
    ) -> None:
        event_name = f"{domain}_{action}".lower()
        human_text = human
        derived = False
        if human_text is None:
            # Local import to avoid cyclic import issues during module init.
            from .event_catalog import EVENT_TEMPLATES as _event_templates

            template = _event_templates.get((domain, action))
            if template:
                try:
                    human_text = template.format(**kwargs)
                except (KeyError, IndexError, ValueError):
                    human_text = template
            else:
                human_text = f"{domain.replace('_', ' ')}: {action.replace('_', ' ')}"
                derived = True
        kwargs.setdefault("_human_text", human_text)
        if derived:
            kwargs.setdefault("derived", True)
        self._log(level, event_name, exc_info=exc_info, **kwargs)

    def _log(
        self, level: int, event_name: str, exc_info: bool = False, **kwargs: object
    ) -> None:
        if not self.logger.isEnabledFor(level):
            return
        kw: dict[str, object] = dict(kwargs)  # copy for mutation in extract
        user, channel, human_text = self._extract_reserved(kw)
        prefix = self._build_prefix(user, channel)
        msg = (
            self._build_debug_message(event_name, prefix, human_text, channel, kw)
            if self._is_debug_enabled()
            else self._build_concise_message(event_name, prefix, human_text, channel)
        )
        self.logger.log(level, msg, exc_info=exc_info)

    @staticmethod
    def _is_debug_enabled() -> bool:
        return os.environ.get("DEBUG", "false").lower() in ("true", "1", "yes")

    @staticmethod
    def _extract_reserved(
        kwargs: dict[str, object],
    ) -> tuple[str | None, str | None, str | None]:
        user_o = kwargs.pop("user", None)
        channel_o = kwargs.pop("channel", None)
        human_text_o = kwargs.pop("_human_text", None)
        user = user_o if isinstance(user_o, str) else None
        channel = channel_o if isinstance(channel_o, str) else None
        human_text = human_text_o if isinstance(human_text_o, str) else None
        return user, channel, human_text

    @staticmethod
    def _build_prefix(user: str | None, channel: str | None) -> str:
        user_label = user or "system"
        core = f"{user_label}#{channel}" if channel else user_label
        padded = core.ljust(24)[:24]
        return f"[{padded}]"

    @staticmethod
    def _decorate_chat(event_name: str, human_text: str | None, channel: str | None) -> str | None:
        # Chat lines read as "💬 #channel sender: message"
        if event_name != "irc_privmsg" or not human_text:
            return human_text
        if channel:
            return f"💬 #{channel} {human_text}"
        return f"💬 {human_text}"

    def _build_debug_message(
        self,
        event_name: str,
        prefix: str,
        human_text: str | None,
        channel: str | None,
        kwargs: dict[str, object],
    ) -> str:
        human_text = self._decorate_chat(event_name, human_text, channel)
        context = ", ".join(f"{k}={v}" for k, v in kwargs.items())
        width = self._event_name_width
        if len(event_name) <= width:
            ev = event_name.ljust(width)
        else:  # truncate but keep rightmost indicator
            ev = event_name[: width - 1] + "…"
        base = f"{ev} {prefix}"
        if human_text:
            base = f"{base} {human_text}"
        if context:
            base = f"{base} ({context})"
        return base

    def _build_concise_message(
        self, event_name: str, prefix: str, human_text: str | None, channel: str | None
    ) -> str:
        human_text = self._decorate_chat(event_name, human_text, channel)
        core = human_text or event_name
        return f"{prefix} {core}"


logger = ChatLogger()
