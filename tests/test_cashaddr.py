import pytest

from cashformats import cashaddr
from cashformats.exceptions import (
    ChecksumMismatch,
    ExcessPadding,
    HashSizeMismatch,
    InvalidCharacter,
    InvalidPadding,
    MixedCase,
    UnknownVersionByte,
    UnrecognizedFormat,
)

# fmt: off
VECTORS_VALID = (  # address type, address, hash
    (0, "bitcoincash:qr6m7j9njldwwzlg9v7v53unlr4jkmx6eylep8ekg2", "F5BF48B397DAE70BE82B3CCA4793F8EB2B6CDAC9"),
    (1, "bchtest:pr6m7j9njldwwzlg9v7v53unlr4jkmx6eyvwc0uz5t", "F5BF48B397DAE70BE82B3CCA4793F8EB2B6CDAC9"),
    (1, "pref:pr6m7j9njldwwzlg9v7v53unlr4jkmx6ey65nvtks5", "F5BF48B397DAE70BE82B3CCA4793F8EB2B6CDAC9"),
    (15, "prefix:0r6m7j9njldwwzlg9v7v53unlr4jkmx6ey3qnjwsrf", "F5BF48B397DAE70BE82B3CCA4793F8EB2B6CDAC9"),
    (2, "bitcoincash:zr6m7j9njldwwzlg9v7v53unlr4jkmx6eycnjehshe", "F5BF48B397DAE70BE82B3CCA4793F8EB2B6CDAC9"),
    (0, "bchreg:qr7fzmep8g7h7ymfxy74lgc0v950j3r295m39d8z59", "FC916F213A3D7F1369313D5FA30F6168F9446A2D"),
    (3, "bitcoincash:rpawqn2h74a4t50phuza84kdp3794pq3cct3k50p0y", "7AE04D57F57B55D1E1BF05D3D6CD0C7C5A8411C6"),
    (0, "bitcoincash:q9adhakpwzztepkpwp5z0dq62m6u5v5xtyj7j3h2ws4mr9g0", "7ADBF6C17084BC86C1706827B41A56F5CA32865925E946EA"),
    (1, "bchtest:p9adhakpwzztepkpwp5z0dq62m6u5v5xtyj7j3h2u94tsynr", "7ADBF6C17084BC86C1706827B41A56F5CA32865925E946EA"),
    (0, "bitcoincash:qgagf7w02x4wnz3mkwnchut2vxphjzccwxgjvvjmlsxqwkcw59jxxuz", "3A84F9CF51AAE98A3BB3A78BF16A6183790B18719126325BFC0C075B"),
    (0, "bitcoincash:qvch8mmxy0rtfrlarg7ucrxxfzds5pamg73h7370aa87d80gyhqxq5nlegake", "3173EF6623C6B48FFD1A3DCC0CC6489B0A07BB47A37F47CFEF4FE69DE825C060"),
    (1, "bitcoincash:p0llllllllllllllllllllllllllllllllllllllllllllllllll7x3vthu35", "ffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffff"),
    (1, "bchtest:pnq8zwpj8cq05n7pytfmskuk9r4gzzel8qtsvwz79zdskftrzxtar994cgutavfklvmgm6ynej", "C07138323E00FA4FC122D3B85B9628EA810B3F381706385E289B0B25631197D194B5C238BEB136FB"),
    (0, "bitcoincash:qh3krj5607v3qlqh5c3wq3lrw3wnuxw0sp8dv0zugrrt5a3kj6ucysfz8kxwv2k53krr7n933jfsunqex2w82sl", "E361CA9A7F99107C17A622E047E3745D3E19CF804ED63C5C40C6BA763696B98241223D8CE62AD48D863F4CB18C930E4C"),
    (1, "pref:pmvl5lzvdm6km38lgga64ek5jhdl7e3aqd9895wu04fvhlnare5937w4ywkq57juxsrhvw8ym5d8qx7sz7zz0zvcypqsammyqffl", "D9FA7C4C6EF56DC4FF423BAAE6D495DBFF663D034A72D1DC7D52CBFE7D1E6858F9D523AC0A7A5C34077638E4DD1A701BD017842789982041"),
    (15, "prefix:0lg0x333p4238k0qrc5ej7rzfw5g8e4a4r6vvzyrcy8j3s5k0en7calvclhw46hudk5flttj6ydvjc0pv3nchp52amk97tqa5zygg96ms92w6845", "D0F346310D5513D9E01E299978624BA883E6BDA8F4C60883C10F28C2967E67EC77ECC7EEEAEAFC6DA89FAD72D11AC961E164678B868AEEEC5F2C1DA08884175B"),
)
# fmt: on

# 5-bit payloads that decode to invalid addresses
PAYLOAD_TAIL = (
    0x16, 0x15, 0x17, 0x16, 0x11, 0x0E, 0x1C, 0x06, 0x19, 0x0A, 0x1C, 0x00, 0x0B,
    0x00, 0x18, 0x05, 0x1E, 0x13, 0x07, 0x1D, 0x0B, 0x02, 0x03, 0x03, 0x03, 0x1A,
    0x03, 0x14, 0x1B, 0x1F, 0x19, 0x18,
)

VECTORS_INVALID_DATA = (
    ([], HashSizeMismatch),
    ([0x1F, 0x01, *PAYLOAD_TAIL], UnknownVersionByte),
    ([0x00, 0x06, *PAYLOAD_TAIL], HashSizeMismatch),
    ([0x07, 0x01, *PAYLOAD_TAIL[:23]], ExcessPadding),
    ([0x07, 0x01, *PAYLOAD_TAIL[:18], 0x0D], InvalidPadding),
)

VECTORS_INVALID_STRING = (
    ("bitcoincash:ppk4hk3wuxe2uqtqc97n8atzrrr6r5mleczf9sur4h", ChecksumMismatch),
    ("bchtest:qpk4hk3wuxe2uqtqc97n8atzrrr6r5mleczf9sur4h", ChecksumMismatch),
    ("bitcoincash:qPk4hk3wuxe2UQtqc97n8atzrRR6r5mlECzf9sur4H", MixedCase),
    ("bitcoincash:PPM2QSZNHKS23Z7629MMS6S4CWEF74VCWVN0H829PQ", MixedCase),
    ("bitcoincash:ppm2qsznbks23z7629mms6s4cwef74vcwvn0h82", InvalidCharacter),
    ("bitcoin cash:ppm2qsznhks23z7629mms6s4cwef74vcwvn0h829pq", InvalidCharacter),
    (":ppm2qsznhks23z7629mms6s4cwef74vcwvn0h829pq", UnrecognizedFormat),
    ("bitcoincash:qqqq", ChecksumMismatch),
)


@pytest.mark.parametrize("addr_type, address, hash_hex", VECTORS_VALID)
def test_decode(addr_type, address, hash_hex):
    prefix, version, hash = cashaddr.decode(address)
    assert prefix == address.split(":")[0]
    assert version >> 3 == addr_type
    assert hash == bytes.fromhex(hash_hex)


@pytest.mark.parametrize("addr_type, address, hash_hex", VECTORS_VALID)
def test_encode(addr_type, address, hash_hex):
    prefix = address.split(":")[0]
    assert cashaddr.encode_full(prefix, addr_type, bytes.fromhex(hash_hex)) == address


@pytest.mark.parametrize("addr_type, address, hash_hex", VECTORS_VALID)
def test_decode_uppercase(addr_type, address, hash_hex):
    assert cashaddr.decode(address.upper()) == cashaddr.decode(address)


@pytest.mark.parametrize("addr_type, address, hash_hex", VECTORS_VALID)
def test_decode_without_prefix(addr_type, address, hash_hex):
    prefix, payload = address.split(":")
    assert cashaddr.decode(payload, prefix) == cashaddr.decode(address)


def test_default_prefix_is_mainnet():
    address = "qpm2qsznhks23z7629mms6s4cwef74vcwvy22gdx6a"
    prefix, version, _ = cashaddr.decode(address)
    assert prefix == "bitcoincash"
    assert version == 0
    with pytest.raises(ChecksumMismatch):
        cashaddr.decode(address, "bchtest")


@pytest.mark.parametrize("data, error", VECTORS_INVALID_DATA)
def test_invalid_data(data, error):
    address = cashaddr.cashaddr_encode(cashaddr.DEFAULT_PREFIX, data)
    with pytest.raises(error):
        cashaddr.decode(address)


@pytest.mark.parametrize("address, error", VECTORS_INVALID_STRING)
def test_invalid_string(address, error):
    with pytest.raises(error):
        cashaddr.decode(address)


def test_unknown_type_decodes():
    # the codec accepts any type, rejecting unknown ones is up to the caller
    data = [0x07, 0x01, *PAYLOAD_TAIL]
    address = cashaddr.cashaddr_encode(cashaddr.DEFAULT_PREFIX, data)
    _, version, hash = cashaddr.decode(address)
    assert version >> 3 == 7
    assert len(hash) == 20


def test_payload_longer_than_declared():
    address = cashaddr.encode(cashaddr.DEFAULT_PREFIX, bytes(25))
    with pytest.raises(HashSizeMismatch):
        cashaddr.decode(address)


def test_single_substitution_detected():
    address = "bitcoincash:qpm2qsznhks23z7629mms6s4cwef74vcwvy22gdx6a"
    start = address.index(":") + 1
    for pos in range(start, len(address)):
        for char in cashaddr.CHARSET:
            if char == address[pos]:
                continue
            mangled = address[:pos] + char + address[pos + 1 :]
            with pytest.raises(ChecksumMismatch):
                cashaddr.decode(mangled)


@pytest.mark.parametrize("size", cashaddr.HASH_SIZES)
def test_version_byte(size):
    version = cashaddr.version_byte(1, size)
    assert cashaddr.split_version_byte(version) == (1, size)


def test_version_byte_invalid():
    with pytest.raises(HashSizeMismatch):
        cashaddr.version_byte(0, 21)
    with pytest.raises(UnknownVersionByte):
        cashaddr.version_byte(16, 20)
    with pytest.raises(UnknownVersionByte):
        cashaddr.split_version_byte(0x80)


def test_convertbits():
    assert cashaddr.convertbits(b"\xff", 8, 5) == [31, 28]
    assert cashaddr.convertbits([31, 28], 5, 8, False) == [255]
    with pytest.raises(InvalidPadding):
        cashaddr.convertbits([31, 29], 5, 8, False)
    with pytest.raises(ValueError):
        cashaddr.convertbits([32], 5, 8)
