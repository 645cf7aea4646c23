import logging
import unittest

import serial

from neato_serial.communicator.command_protocol import CommandProtocol
from neato_serial.communicator.line_framer import LineFramer
from neato_serial.device_simulator import ScriptedLink
from neato_serial.errors import HandshakeTimeoutError, LinkError, SyncTimeoutError
from neato_serial.models import Toggle
from neato_serial.param_types import CommandDefinition, CommandShape
from neato_serial.robots.commands.dseries_commands import DSeriesCommand


class FlakyLink(ScriptedLink):
    """
    A ScriptedLink whose first read fails.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.failures = 1

    def read(self, size=1):
        if self.failures:
            self.failures -= 1
            raise serial.SerialException("read failed")
        return super().read(size)


class BrokenWriteLink(ScriptedLink):
    def write(self, data):
        raise serial.SerialTimeoutException("Write timeout")


def make_protocol(link, **kwargs):
    sleeps = []
    protocol = CommandProtocol(link, LineFramer(link), sleep=sleeps.append,
                               logger=logging.getLogger("test.commands"), **kwargs)
    return protocol, sleeps


class CommandProtocolTest(unittest.TestCase):
    def test_build_command(self):
        self.assertEqual(CommandProtocol.build_command("setmotor", 100, -100, 50), "setmotor 100 -100 50")
        self.assertEqual(CommandProtocol.build_command("getmotors"), "getmotors")

    def test_send_with_echo(self):
        link = ScriptedLink(["getldsscan", "AngleInDegrees,DistInMM"])
        protocol, _ = make_protocol(link)
        self.assertEqual(protocol.send_with_echo("getldsscan"), "getldsscan")
        self.assertEqual(link.written, [b"getldsscan\n"])
        self.assertEqual(link.flush_count, 1)
        self.assertEqual(protocol.framer.read_line(), "AngleInDegrees,DistInMM")

    def test_echo_errors_are_swallowed(self):
        link = ScriptedLink()
        protocol, _ = make_protocol(link)
        with self.assertLogs("test.commands", level="WARNING"):
            self.assertIsNone(protocol.send_with_echo("setmotor 1 1 1"))
        self.assertEqual(link.commands, ["setmotor 1 1 1"])

    def test_invalid_echo_is_swallowed(self):
        link = ScriptedLink(data=b"\xff\n")
        protocol, _ = make_protocol(link)
        with self.assertLogs("test.commands", level="WARNING"):
            self.assertIsNone(protocol.send_with_echo("getldsscan"))

    def test_write_failure_is_a_link_error(self):
        protocol, _ = make_protocol(BrokenWriteLink())
        with self.assertRaises(LinkError):
            protocol.send_with_echo("getmotors")

    def test_send_query_leaves_block_on_the_link(self):
        link = ScriptedLink(["getcharger", "Label,Value", "FuelPercent,87"])
        protocol, _ = make_protocol(link)
        protocol.send_query("getcharger")
        self.assertEqual(protocol.framer.read_lines(2), ["Label,Value", "FuelPercent,87"])
        self.assertEqual(link.flush_count, 1)

    def test_settle_sleeps_after_flush(self):
        link = ScriptedLink(["setldsrotation on"])
        protocol, sleeps = make_protocol(link, settle_delay=5.0)
        protocol.send_with_settle("setldsrotation on")
        self.assertEqual(sleeps, [5.0])
        self.assertEqual(link.flush_count, 1)
        self.assertEqual(link.commands, ["setldsrotation on"])


class HandshakeTest(unittest.TestCase):
    def test_skips_noise_until_confirmed(self):
        link = ScriptedLink(["garbage", "", "Unknown Cmd", "testmode on", "after"])
        protocol, _ = make_protocol(link)
        self.assertEqual(protocol.handshake("testmode on", "testmode"), "testmode on")
        self.assertEqual(link.commands, ["testmode on"])
        self.assertEqual(link.flush_count, 1)
        self.assertEqual(protocol.framer.read_line(), "after")

    def test_read_errors_keep_polling(self):
        link = FlakyLink(["testmode on"])
        protocol, _ = make_protocol(link)
        with self.assertLogs("test.commands", level="WARNING"):
            self.assertEqual(protocol.handshake("testmode on", "testmode"), "testmode on")

    def test_bound_exceeded(self):
        link = ScriptedLink(["a", "b", "c", "testmode on"])
        protocol, _ = make_protocol(link, max_handshake_lines=3)
        with self.assertRaises(HandshakeTimeoutError):
            protocol.handshake("testmode on", "testmode")

    def test_silent_link_counts_against_bound(self):
        protocol, _ = make_protocol(ScriptedLink(), max_handshake_lines=5)
        with self.assertLogs("test.commands", level="WARNING"):
            with self.assertRaises(SyncTimeoutError):
                protocol.handshake("testmode off", "testmode")


class SendByShapeTest(unittest.TestCase):
    def test_handshake_shape(self):
        link = ScriptedLink(["noise", "testmode on"])
        protocol, sleeps = make_protocol(link)
        self.assertEqual(protocol.send(DSeriesCommand.TESTMODE, Toggle.ON), "testmode on")
        self.assertEqual(link.commands, ["testmode on"])
        self.assertEqual(sleeps, [])

    def test_settle_shape(self):
        link = ScriptedLink(["setldsrotation off"])
        protocol, sleeps = make_protocol(link, settle_delay=1.5)
        self.assertEqual(protocol.send(DSeriesCommand.LDS_ROTATION, Toggle.OFF), "setldsrotation off")
        self.assertEqual(sleeps, [1.5])

    def test_echo_shape(self):
        link = ScriptedLink(["setled backlighton", "next"])
        protocol, sleeps = make_protocol(link)
        self.assertEqual(protocol.send(DSeriesCommand.SET_LED, "backlighton"), "setled backlighton")
        self.assertEqual(protocol.framer.read_line(), "next")
        self.assertEqual(sleeps, [])

    def test_query_shape_leaves_block(self):
        link = ScriptedLink(["getmotors", "Parameter,Value"])
        protocol, _ = make_protocol(link)
        self.assertIsNone(protocol.send(DSeriesCommand.GET_MOTORS))
        self.assertEqual(protocol.framer.read_line(), "Parameter,Value")

    def test_every_command_has_a_shape(self):
        for name, value in vars(DSeriesCommand).items():
            if isinstance(value, CommandDefinition):
                with self.subTest(command=name):
                    self.assertIsInstance(value.shape, CommandShape)
                    if value.shape is CommandShape.QUERY:
                        self.assertTrue(value.header)
                        self.assertGreater(value.line_count, 0)
                    if value.shape is CommandShape.HANDSHAKE:
                        self.assertTrue(value.confirm)


if __name__ == "__main__":
    unittest.main()
