from __future__ import annotations

from typing import Dict, Any, Union

DEFAULT_FUNCTION_COLOR = '<fg #EE9B00>'
DEFAULT_CLASS_COLOR = '<fg #0A9396>'
DEFAULT_KIND_COLOR = '<fg #BB3E03>'


class LoggerFormatter:

    @classmethod
    def default_formatter(cls, record: Dict[str, Union[Dict[str, Any], Any]]) -> str:
        """
        Formats records as `level time: module:function: message`.

        Records bound with `logger.bind(kind = 'get')` carry the operation kind
        in front of the message.
        """
        _extra = record.get('extra', {})
        extra = DEFAULT_CLASS_COLOR + '{name}</>:' + DEFAULT_FUNCTION_COLOR + '{function}</>: '
        if _extra.get('kind'):
            extra += DEFAULT_KIND_COLOR + '{extra[kind]}</>: '
        return "<level>{level: <8}</> <green>{time:YYYY-MM-DD HH:mm:ss.SSS}</>: " \
                   + extra + "<level>{message}</level>\n{exception}"
