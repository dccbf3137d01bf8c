from cosmon.config import Config
from cosmon.gpio import GpioPins


def test_cos_reads_raw_level(mock_factory):
    pins = GpioPins(cos_pin=21, shutdown_pin=4, network_pin=22)
    try:
        mock_factory.pin(21).drive_low()
        assert pins.read_cos() is False
        mock_factory.pin(21).drive_high()
        assert pins.read_cos() is True
    finally:
        pins.close()


def test_shutdown_button_is_active_low_with_pullup(mock_factory):
    pins = GpioPins(cos_pin=21, shutdown_pin=4, network_pin=22)
    try:
        # Pull-up: released reads HIGH.
        assert pins.shutdown_pressed() is False
        mock_factory.pin(4).drive_low()
        assert pins.shutdown_pressed() is True
        mock_factory.pin(4).drive_high()
        assert pins.shutdown_pressed() is False
    finally:
        pins.close()


def test_network_output_levels(mock_factory):
    pins = GpioPins(cos_pin=21, shutdown_pin=4, network_pin=22)
    try:
        pins.write_network(True)
        assert mock_factory.pin(22).state
        pins.write_network(False)
        assert not mock_factory.pin(22).state
    finally:
        pins.close()


def test_from_config_uses_configured_pins(mock_factory):
    pins = GpioPins.from_config(Config(cos_pin=26, shutdown_pin=17, network_pin=16))
    try:
        assert pins.cos.pin is mock_factory.pin(26)
        assert pins.shutdown.pin is mock_factory.pin(17)
        assert pins.network.pin is mock_factory.pin(16)
    finally:
        pins.close()
