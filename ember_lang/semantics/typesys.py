from __future__ import annotations
from enum import Enum


class BuiltinType(Enum):
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"

    def __str__(self) -> str:
        return self.value


# Type tags as written in source; annotations may carry either form.
Type = BuiltinType | str
