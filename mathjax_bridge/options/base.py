"""
配置组基类
配置组是不可变的数据记录，跨越引擎边界前序列化为 JSON 文本

字段名使用 snake_case，序列化时转换为引擎使用的 camelCase，
不规则的键名通过 field(metadata={"key": ...}) 指定。
标记 metadata={"flatten": True} 的字段是嵌入的公共配置组，
序列化时与外层合并为同一层。
"""
import dataclasses
import functools
import json
from collections.abc import Mapping as AbstractMapping
from typing import (
    Any,
    Dict,
    Iterator,
    Mapping,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from ..utils.regex_patterns import SNAKE_SEGMENT


class FrozenMap(AbstractMapping):
    """只读且可哈希的映射，用于配置组中的字典字段

    与普通 dict 按内容比较相等
    """

    __slots__ = ("_data",)

    def __init__(self, *args: Any, **kwargs: Any):
        self._data = dict(*args, **kwargs)

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __hash__(self) -> int:
        return hash(frozenset(self._data.items()))

    def __repr__(self) -> str:
        return f"FrozenMap({self._data!r})"


def _freeze(value: Any) -> Any:
    """把 dict / list 转换为不可变的 FrozenMap / tuple"""
    if isinstance(value, OptionsRecord):
        return value
    if isinstance(value, AbstractMapping):
        return FrozenMap({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


def engine_key(name: str) -> str:
    """snake_case 字段名转换为 camelCase 键名"""
    return SNAKE_SEGMENT.sub(lambda m: m.group(1).upper(), name)


def _key(f: dataclasses.Field) -> str:
    return f.metadata.get("key") or engine_key(f.name)


@functools.lru_cache(maxsize=None)
def _hints(cls: type) -> Dict[str, Any]:
    return get_type_hints(cls)


def _encode(value: Any) -> Any:
    if isinstance(value, OptionsRecord):
        return value.to_dict()
    if isinstance(value, (tuple, list)):
        return [_encode(item) for item in value]
    if isinstance(value, Mapping):
        return {key: _encode(item) for key, item in value.items()}
    return value


def _decode(hint: Any, value: Any) -> Any:
    """按字段类型还原 JSON 值"""
    if value is None:
        return None

    if isinstance(hint, type) and issubclass(hint, OptionsRecord):
        return hint.from_dict(value)

    origin = get_origin(hint)
    args = get_args(hint)

    # Optional[X]
    if origin is Union:
        members = [arg for arg in args if arg is not type(None)]
        return _decode(members[0], value) if len(members) == 1 else value

    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return tuple(_decode(args[0], item) for item in value)
        return tuple(_decode(arg, item) for arg, item in zip(args, value))

    if origin in (dict, AbstractMapping):
        value_hint = args[1] if args else Any
        return FrozenMap(
            {key: _decode(value_hint, item) for key, item in value.items()}
        )

    return value


class OptionsRecord:
    """配置组混入类，子类必须是 frozen dataclass"""

    def __post_init__(self) -> None:
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            frozen = _freeze(value)
            if frozen is not value:
                object.__setattr__(self, f.name, frozen)

    def to_dict(self) -> Dict[str, Any]:
        """转换为引擎侧的字典"""
        result: Dict[str, Any] = {}
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if f.metadata.get("flatten"):
                result.update(value.to_dict())
            else:
                result[_key(f)] = _encode(value)
        return result

    def to_json(self) -> str:
        """规范文本形式"""
        return json.dumps(self.to_dict(), ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]):
        """从引擎侧字典还原，未知键忽略，缺失键使用默认值"""
        hints = _hints(cls)
        kwargs = {}
        for f in dataclasses.fields(cls):
            hint = hints[f.name]
            if f.metadata.get("flatten"):
                kwargs[f.name] = hint.from_dict(data)
                continue
            key = _key(f)
            if key in data:
                kwargs[f.name] = _decode(hint, data[key])
        return cls(**kwargs)

    @classmethod
    def from_json(cls, text: str):
        return cls.from_dict(json.loads(text))

    def replace(self, **changes):
        """返回修改了部分字段的新配置组"""
        return dataclasses.replace(self, **changes)
