"""把 pydantic 的错误列表整理成“字段路径 -> 原因”的映射。"""

from typing import Any, Iterable, Mapping, Sequence

ROOT_FIELD = "__root__"

_MESSAGES: dict[str, str] = {
    "missing": "该字段为必填项",
    "string_too_short": "不能为空",
    "string_type": "必须为字符串",
    "string_pattern_mismatch": "格式不正确",
    "enum": "取值不在允许范围内",
    "literal_error": "取值不在允许范围内",
    "int_parsing": "必须为整数",
    "int_type": "必须为整数",
    "int_from_float": "必须为整数",
    "float_parsing": "必须为数字",
    "float_type": "必须为数字",
    "greater_than": "数值过小",
    "greater_than_equal": "数值过小",
    "less_than_equal": "数值过大",
    "bool_parsing": "必须为布尔值",
    "bool_type": "必须为布尔值",
    "datetime_parsing": "必须为合法的时间",
    "datetime_from_date_parsing": "必须为合法的时间",
    "datetime_type": "必须为合法的时间",
    "list_type": "必须为列表",
    "too_short": "至少需要一项",
    "dict_type": "必须为对象",
    "model_type": "必须为对象",
    "model_attributes_type": "必须为对象",
}


def _path(loc: Sequence[Any], strip_prefixes: Iterable[str]) -> str:
    parts = list(loc)
    if parts and parts[0] in set(strip_prefixes):
        parts = parts[1:]
    if not parts:
        return ROOT_FIELD
    return ".".join(str(part) for part in parts)


def _reason(error: Mapping[str, Any]) -> str:
    error_type = error.get("type", "")
    if error_type == "value_error":
        ctx = error.get("ctx") or {}
        original = ctx.get("error")
        if original is not None:
            return str(original)
    return _MESSAGES.get(error_type, error.get("msg") or "取值无效")


def field_errors_from_pydantic(
    errors: Iterable[Mapping[str, Any]],
    *,
    strip_prefixes: Iterable[str] = (),
) -> dict[str, str]:
    """每个失败字段保留一条原因；同一字段的多条错误只取第一条。"""
    prefixes = tuple(strip_prefixes)
    result: dict[str, str] = {}
    for error in errors:
        path = _path(error.get("loc", ()), prefixes)
        result.setdefault(path, _reason(error))
    return result
