import pytest

from mysqlreplay.protocol import (
    CachingSha2Auth,
    ClientFlag,
    Command,
    FieldFlag,
    FieldType,
    PacketHeader,
    StatusFlag,
)


@pytest.mark.parametrize("flag_type", [ClientFlag, FieldFlag, StatusFlag])
def test_flags_are_consecutive_powers_of_two(flag_type):
    values = [member.value for member in flag_type]
    assert values == [1 << i for i in range(len(values))]


def test_client_flag_composition():
    caps = ClientFlag(ClientFlag.PROTOCOL_41.value | ClientFlag.SECURE_CONN.value)
    assert ClientFlag.PROTOCOL_41 in caps
    assert ClientFlag.SECURE_CONN in caps
    assert ClientFlag.SSL not in caps


def test_commands_are_consecutive_from_quit():
    values = [member.value for member in Command]
    assert values == list(range(Command.QUIT, Command.QUIT + len(values)))
    assert Command(Command.STMT_PREPARE + 1) is Command.STMT_EXECUTE


def test_packet_header_lookup():
    assert PacketHeader(0xFE) is PacketHeader.EOF
    assert PacketHeader(0xFF) is PacketHeader.ERR
    with pytest.raises(ValueError):
        PacketHeader(0x02)


def test_field_type_high_range():
    assert FieldType(0xF5) is FieldType.JSON
    high = [m.value for m in FieldType if m.value >= FieldType.JSON]
    assert high == list(range(0xF5, 0x100))


def test_field_type_low_range_ends_with_bit():
    assert FieldType(0x10) is FieldType.BIT
    with pytest.raises(ValueError):
        FieldType(0x11)


def test_caching_sha2_lookup():
    assert CachingSha2Auth(2) is list(CachingSha2Auth)[0]
    assert CachingSha2Auth(4) is list(CachingSha2Auth)[-1]
    with pytest.raises(ValueError):
        CachingSha2Auth(5)