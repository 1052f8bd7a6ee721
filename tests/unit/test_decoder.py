"""Unit tests for the registry-driven decoder."""

from __future__ import annotations

import time
from typing import Any, Callable

import pytest

from scalewalk import (
    DecodeConfig,
    DecodeError,
    Decoder,
    HexFormatError,
    InsufficientBytes,
    NonCanonicalCompact,
    PortableRegistry,
    RecursionDepthExceeded,
    TrailingBytes,
    TypeNotFound,
    TypeNotImplemented,
    VariantIndexOutOfRange,
    decode,
    decode_all,
    decode_hex,
)

MakeRegistry = Callable[[list[Any]], PortableRegistry]


class TestScalars:
    """Test primitive and compact types through the registry."""

    def test_u8(self, registry: PortableRegistry) -> None:
        assert decode(0, b"\x2a", registry) == (42, b"")

    def test_signed(self, registry: PortableRegistry) -> None:
        assert decode(16, b"\x00\x80", registry) == (-32768, b"")

    def test_str(self, registry: PortableRegistry) -> None:
        assert decode(1, b"\x14hello\x01", registry) == ("hello", b"\x01")

    def test_bool(self, registry: PortableRegistry) -> None:
        assert decode(2, b"\x01", registry) == (True, b"")

    def test_char(self, registry: PortableRegistry) -> None:
        assert decode(17, b"\x41\x00\x00\x00", registry) == ("A", b"")

    def test_compact(self, registry: PortableRegistry) -> None:
        assert decode(4, b"\x04", registry) == (1, b"")
        assert decode(18, b"\x01\x01", registry) == (64, b"")

    def test_unknown_primitive(self, make_registry: MakeRegistry) -> None:
        registry = make_registry([{"primitive": "f32"}])
        with pytest.raises(TypeNotImplemented):
            decode(0, b"\x00\x00\x00\x00", registry)


class TestCollections:
    """Test arrays and sequences."""

    def test_array_consumes_exact_length(self, registry: PortableRegistry) -> None:
        value, tail = decode(6, b"\x01\x02\x03\x04\x05\x06", registry)
        assert value == [1, 2, 3, 4]
        assert tail == b"\x05\x06"

    def test_array_truncated(self, registry: PortableRegistry) -> None:
        with pytest.raises(InsufficientBytes):
            decode(6, b"\x01\x02\x03", registry)

    def test_zero_length_array(self, make_registry: MakeRegistry) -> None:
        registry = make_registry([{"primitive": "u8"}, {"array": {"len": 0, "type": 0}}])
        assert decode(1, b"\xff", registry) == ([], b"\xff")

    def test_sequence(self, registry: PortableRegistry) -> None:
        assert decode(5, b"\x0c\x01\x02\x03\x09", registry) == ([1, 2, 3], b"\x09")

    def test_empty_sequence(self, registry: PortableRegistry) -> None:
        assert decode(5, b"\x00", registry) == ([], b"")

    def test_sequence_length_exceeds_input(self, registry: PortableRegistry) -> None:
        with pytest.raises(InsufficientBytes):
            decode(5, b"\x10\x01\x02", registry)

    def test_sequence_of_structs(self, registry: PortableRegistry) -> None:
        value, tail = decode(19, b"\x08\x05\x08hi\x06\x04a", registry)
        assert value == [{"age": 5, "name": "hi"}, {"age": 6, "name": "a"}]
        assert tail == b""

    def test_sequence_non_canonical_length(self, registry: PortableRegistry) -> None:
        with pytest.raises(NonCanonicalCompact):
            decode(5, b"\x01\x00", registry)
        lenient = DecodeConfig(strict_compact=False)
        assert decode(5, b"\x01\x00", registry, config=lenient) == ([], b"")

    def test_large_sequence_decodes_in_linear_time(self, registry: PortableRegistry) -> None:
        count = 500_000
        prefix = ((count << 2) | 0b10).to_bytes(4, "little")
        data = prefix + bytes(range(256)) * 1953 + b"\x00" * 32
        assert len(data) == 4 + count
        start = time.perf_counter()
        value, tail = decode(5, data + b"\xee", registry)
        elapsed = time.perf_counter() - start
        assert len(value) == count
        assert value[:3] == [0, 1, 2]
        assert tail == b"\xee"
        assert elapsed < 10.0

    def test_zero_width_sequence(self, make_registry: MakeRegistry) -> None:
        registry = make_registry([{"tuple": []}, {"sequence": {"type": 0}}])
        assert decode(1, b"\x0c\xaa\xbb\xcc", registry) == ([(), (), ()], b"\xaa\xbb\xcc")

    def test_zero_width_sequence_length_exceeds_input(self, make_registry: MakeRegistry) -> None:
        registry = make_registry([{"tuple": []}, {"sequence": {"type": 0}}])
        with pytest.raises(DecodeError, match="zero-width"):
            decode(1, b"\x03\xff\xff\xff\xff", registry)
        with pytest.raises(DecodeError, match="zero-width"):
            decode(1, b"\x0c\xaa", registry)

    def test_sequence_length_exceeds_input_fails_fast(self, registry: PortableRegistry) -> None:
        with pytest.raises(InsufficientBytes) as exc_info:
            decode(5, b"\x03\xff\xff\xff\xff\x01\x02", registry)
        assert exc_info.value.needed == 0xFFFFFFFF
        assert exc_info.value.available == 2


class TestProducts:
    """Test tuples, structs and unit."""

    def test_tuple(self, registry: PortableRegistry) -> None:
        assert decode(7, b"\x07\x01\x00\x00\x00", registry) == ((7, 1), b"")

    def test_single_member_tuple_unwraps(self, registry: PortableRegistry) -> None:
        """Test a one-member tuple decodes to the bare member value."""
        assert decode(8, b"\x07\xff", registry) == (7, b"\xff")

    def test_empty_tuple(self, make_registry: MakeRegistry) -> None:
        registry = make_registry([{"tuple": []}])
        assert decode(0, b"\x01", registry) == ((), b"\x01")

    def test_unnamed_composite_is_tuple(self, registry: PortableRegistry) -> None:
        assert decode(11, b"\x07\x01", registry) == ((7, True), b"")

    def test_struct_preserves_field_order(self, registry: PortableRegistry) -> None:
        value, tail = decode(9, b"\x05\x08hi", registry)
        assert value == {"age": 5, "name": "hi"}
        assert list(value) == ["age", "name"]
        assert tail == b""

    def test_struct_field_order_follows_declaration(self, make_registry: MakeRegistry) -> None:
        registry = make_registry(
            [
                {"primitive": "u8"},
                {"composite": {"fields": [{"name": "zeta", "type": 0}, {"name": "alpha", "type": 0}]}},
            ]
        )
        value, _ = decode(1, b"\x01\x02", registry)
        assert list(value.items()) == [("zeta", 1), ("alpha", 2)]

    def test_unit_consumes_nothing(self, registry: PortableRegistry) -> None:
        assert decode(10, b"\xaa", registry) == ((), b"\xaa")
        assert decode(10, b"", registry) == ((), b"")


class TestVariants:
    """Test variant dispatch."""

    def test_dispatch_by_explicit_index(self, make_registry: MakeRegistry) -> None:
        """Test the case is chosen by its discriminant, not its position."""
        registry = make_registry(
            [{"variant": {"variants": [{"name": "B", "index": 5}, {"name": "A", "index": 0}]}}]
        )
        assert decode(0, b"\x05", registry) == ("B", b"")
        assert decode(0, b"\x00", registry) == ("A", b"")

    def test_simple_case(self, registry: PortableRegistry) -> None:
        assert decode(12, b"\x00\x33", registry) == ("A", b"\x33")

    def test_tuple_case(self, registry: PortableRegistry) -> None:
        assert decode(12, b"\x05\x07", registry) == ({"B": 7}, b"")

    def test_struct_case(self, registry: PortableRegistry) -> None:
        assert decode(12, b"\x02\x01\x00\x00\x00", registry) == ({"C": {"x": 1}}, b"")

    def test_multi_member_tuple_case(self, make_registry: MakeRegistry) -> None:
        registry = make_registry(
            [
                {"primitive": "u8"},
                {"variant": {"variants": [{"name": "Pair", "index": 1, "fields": [{"type": 0}, {"type": 0}]}]}},
            ]
        )
        assert decode(1, b"\x01\x02\x03", registry) == ({"Pair": (2, 3)}, b"")

    def test_unknown_discriminant(self, registry: PortableRegistry) -> None:
        with pytest.raises(VariantIndexOutOfRange) as exc_info:
            decode(12, b"\x09", registry)
        assert exc_info.value.index == 9
        assert sorted(exc_info.value.available) == [0, 2, 5]

    def test_empty_input(self, registry: PortableRegistry) -> None:
        with pytest.raises(InsufficientBytes):
            decode(12, b"", registry)

    def test_empty_variant_rejects_every_byte(self, registry: PortableRegistry) -> None:
        with pytest.raises(VariantIndexOutOfRange):
            decode(13, b"\x00", registry)

    def test_payload_truncated(self, registry: PortableRegistry) -> None:
        with pytest.raises(InsufficientBytes):
            decode(12, b"\x02\x01\x00", registry)


class TestFailures:
    """Test error reporting."""

    def test_type_not_found(self, make_registry: MakeRegistry) -> None:
        registry = make_registry([{"primitive": "u8"}] * 10)
        with pytest.raises(TypeNotFound):
            decode(99, b"\x00", registry)

    def test_dangling_reference_reached(self, make_registry: MakeRegistry) -> None:
        registry = make_registry([{"sequence": {"type": 50}}])
        assert decode(0, b"\x00", registry) == ([], b"")
        with pytest.raises(TypeNotFound) as exc_info:
            decode(0, b"\x04\x00", registry)
        assert exc_info.value.type_id == 50

    def test_bit_sequence_not_implemented(self, registry: PortableRegistry) -> None:
        with pytest.raises(TypeNotImplemented, match="bit sequence"):
            decode(14, b"\x00", registry)

    def test_nested_failure_propagates(self, registry: PortableRegistry) -> None:
        """Test an error deep inside a value aborts the whole decode."""
        with pytest.raises(InsufficientBytes):
            decode(19, b"\x08\x05\x08hi\x06\x08a", registry)

    def test_cyclic_decode_hits_depth_limit(self, make_registry: MakeRegistry) -> None:
        registry = make_registry(
            [
                {"composite": {"fields": [{"name": "b", "type": 1}]}},
                {"composite": {"fields": [{"name": "a", "type": 0}]}},
            ]
        )
        with pytest.raises(RecursionDepthExceeded):
            decode(0, b"", registry)


class TestRecursiveTypes:
    """Test self-referential types that terminate."""

    @pytest.fixture
    def list_registry(self, make_registry: MakeRegistry) -> PortableRegistry:
        return make_registry(
            [
                {
                    "variant": {
                        "variants": [
                            {"name": "Nil", "index": 0},
                            {"name": "Cons", "index": 1, "fields": [{"type": 1}, {"type": 0}]},
                        ]
                    }
                },
                {"primitive": "u8"},
            ]
        )

    def test_linked_list(self, list_registry: PortableRegistry) -> None:
        value, tail = decode(0, b"\x01\x07\x01\x08\x00", list_registry)
        assert value == {"Cons": (7, {"Cons": (8, "Nil")})}
        assert tail == b""

    def test_depth_limit(self, list_registry: PortableRegistry) -> None:
        data = b"\x01\x00" * 5 + b"\x00"
        assert decode(0, data, list_registry)[1] == b""
        with pytest.raises(RecursionDepthExceeded):
            decode(0, data, list_registry, config=DecodeConfig(max_depth=3))

    def test_max_depth_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            DecodeConfig(max_depth=0)


class TestEntryPoints:
    """Test decode input types and the helper entry points."""

    @pytest.mark.parametrize("data", [bytearray(b"\x05\x08hi\xff"), memoryview(b"\x05\x08hi\xff")])
    def test_bytes_like_input(self, registry: PortableRegistry, data: Any) -> None:
        value, tail = decode(9, data, registry)
        assert value == {"age": 5, "name": "hi"}
        assert tail == b"\xff"
        assert isinstance(tail, bytes)

    def test_input_not_modified(self, registry: PortableRegistry) -> None:
        data = bytearray(b"\x0c\x01\x02\x03")
        decode(5, data, registry)
        assert data == bytearray(b"\x0c\x01\x02\x03")

    def test_deterministic(self, registry: PortableRegistry) -> None:
        data = b"\x08\x05\x08hi\x06\x04a\x99"
        assert decode(19, data, registry) == decode(19, data, registry)

    def test_decoder_reusable(self, registry: PortableRegistry) -> None:
        decoder = Decoder(registry)
        assert decoder.decode(0, b"\x01") == (1, b"")
        assert decoder.decode(5, b"\x04\x02") == ([2], b"")

    def test_decode_hex(self, registry: PortableRegistry) -> None:
        assert decode_hex(9, "0x05086869", registry) == {"age": 5, "name": "hi"}
        assert decode_hex(9, "05086869", registry) == {"age": 5, "name": "hi"}

    def test_decode_hex_trailing_bytes(self, registry: PortableRegistry) -> None:
        with pytest.raises(TrailingBytes) as exc_info:
            decode_hex(0, "0x0102", registry)
        assert exc_info.value.remaining == b"\x02"

    def test_decode_hex_bad_text(self, registry: PortableRegistry) -> None:
        with pytest.raises(HexFormatError):
            decode_hex(0, "0xzz", registry)

    def test_decode_all(self, registry: PortableRegistry) -> None:
        assert decode_all(9, b"\x05\x08hi\x06\x04a", registry) == [
            {"age": 5, "name": "hi"},
            {"age": 6, "name": "a"},
        ]
        assert decode_all(0, b"", registry) == []

    def test_decode_all_partial_value(self, registry: PortableRegistry) -> None:
        with pytest.raises(InsufficientBytes):
            decode_all(3, b"\x01\x00\x00\x00\x02", registry)

    def test_decode_all_zero_width(self, registry: PortableRegistry) -> None:
        with pytest.raises(DecodeError, match="no bytes"):
            decode_all(10, b"\x00", registry)
