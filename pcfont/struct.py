"""
pcfont.struct - binary structures

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import ctypes
from types import SimpleNamespace
from functools import partial

from .errors import TruncatedInputError


# type strings
TYPES = {
    'uint8': ctypes.c_uint8,
    'int8': ctypes.c_int8,
    'uint16': ctypes.c_uint16,
    'int16': ctypes.c_int16,
    'uint32': ctypes.c_uint32,
    'int32': ctypes.c_int32,
}


def _parse_type(atype):
    """Convert struct member type specification to ctypes base type or array."""
    if isinstance(atype, _WrappedCType):
        return atype._ctype
    try:
        return TYPES[atype]
    except KeyError:
        pass
    if isinstance(atype, str) and atype.endswith('s'):
        return ctypes.c_char * int(atype[:-1])
    raise ValueError('Field type `{}` not understood'.format(atype))


def _endian_parent(endian, big, little):
    if endian[:1].lower() in ('b', '>'):
        return big
    elif endian[:1].lower() in ('l', '<'):
        return little
    raise ValueError(f"Endianness '{endian}' not recognised.")


class _WrappedCType:
    """Wrapper for ctypes type, factory for values."""

    def __mul__(self, count):
        """Create an array."""
        return ArrayType(self, count)

    __rmul__ = __mul__

    @property
    def size(self):
        return ctypes.sizeof(self._ctype)

    def from_bytes(self, data):
        """Convert bytes of exactly the right size."""
        if len(data) < self.size:
            raise TruncatedInputError(
                f'Need {self.size} bytes, got {len(data)}'
            )
        return self._convert(self._ctype.from_buffer_copy(data))

    def read_from(self, cursor):
        """Read value from cursor."""
        return self.from_bytes(cursor.read(self.size))

    def _convert(self, cvalue):
        raise NotImplementedError()


class ScalarType(_WrappedCType):
    """Integer type with explicit byte order."""

    def __init__(self, endian, ctype):
        self._ctype = _endian_parent(
            endian, ctype.__ctype_be__, ctype.__ctype_le__
        )

    def __call__(self, value=0):
        """Instantiate as bytes."""
        return bytes(self._ctype(value))

    def _convert(self, cvalue):
        return cvalue.value


class ArrayType(_WrappedCType):
    """Run of equal elements."""

    def __init__(self, element_type, count):
        if count < 0:
            raise ValueError(f'Negative array size {count}')
        self.element_type = element_type
        self._ctype = element_type._ctype * count

    def __call__(self, *values):
        """Instantiate as bytes."""
        if isinstance(self.element_type, StructType):
            return b''.join(self.element_type(**_v) for _v in values)
        return bytes(self._ctype(*values))

    def _convert(self, cvalue):
        if isinstance(self.element_type, ScalarType):
            return tuple(cvalue)
        return tuple(self.element_type._convert(_v) for _v in cvalue)


class StructType(_WrappedCType):
    """
    Represent a structured type.

    mystruct = StructType('big', first='uint8', second='uint16')
    assert mystruct(first=1, second=2) == b'\1\0\2'
    assert mystruct.from_bytes(b'\1\0\2') == SimpleNamespace(first=1, second=2)
    """

    def __init__(self, endian, /, **description):
        """Create a structured type."""
        parent = _endian_parent(
            endian, ctypes.BigEndianStructure, ctypes.LittleEndianStructure
        )

        class _CStruct(parent):
            _pack_ = 1
            _layout_ = 'ms'
            _fields_ = tuple(
                (_field, _parse_type(_type))
                for _field, _type in description.items()
            )

        self._ctype = _CStruct
        self.element_types = description

    def __call__(self, **kwargs):
        """Instantiate as bytes."""
        return bytes(self._ctype(**kwargs))

    def _convert(self, cvalue):
        return SimpleNamespace(**{
            _field: getattr(cvalue, _field)
            for _field, *_ in cvalue._fields_
        })


def _namespace(endian):
    return SimpleNamespace(
        Struct=partial(StructType, endian),
        **{
            _name: ScalarType(endian, _ctype)
            for _name, _ctype in TYPES.items()
        }
    )


big_endian = _namespace('>')
little_endian = _namespace('<')
