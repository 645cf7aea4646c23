#main.py
"""
Main entry point for the robot driver.
Opens the serial link (or a simulated robot), runs the start-up choreography
and reports the first failure to the user.
"""

import argparse            # Imports argparse to read the command line
import sys                 # Imports sys to set the process exit status
import logging             # Imports logging to choose the console level

from neato_serial.communicator.protocol_factory import get_robot, get_robot_parameters
from neato_serial.communicator.serial_link import list_serial_ports, open_serial_link
from neato_serial.config import BAUD_RATES, DEFAULT_ROBOT, setup_logging
from neato_serial.device_simulator import DeviceSimulator
from neato_serial.errors import NeatoError
from neato_serial.models import Toggle


def parse_args(argv=None):
    """
    Builds the command line parser and parses the arguments.
    argv: Optional argument list; defaults to sys.argv[1:].
    """
    parser = argparse.ArgumentParser(description="Drive a Neato robot over its serial test interface")
    parser.add_argument("--port", default="/dev/ttyACM0", help="Serial device path")
    parser.add_argument("--baud", type=int, default=None, choices=BAUD_RATES, help="Baud rate (model default if omitted)")
    parser.add_argument("--timeout", type=float, default=None, help="Read timeout in seconds")
    parser.add_argument("--robot", default=DEFAULT_ROBOT, help="Robot model")
    parser.add_argument("--simulate", action="store_true", help="Talk to a simulated robot")
    parser.add_argument("--settle-delay", type=float, default=None,
                        help="Seconds to wait after toggling LDS rotation")
    parser.add_argument("--sync-limit", type=int, default=None,
                        help="Give up header/handshake synchronization after this many lines")
    parser.add_argument("--list-ports", action="store_true", help="List serial ports and exit")
    parser.add_argument("--debug", action="store_true", help="Show protocol traffic")
    return parser.parse_args(argv)


def run_choreography(robot, logger):
    """
    Runs the fixed start-up sequence. Each step assumes the previous one
    succeeded, so the first error aborts the sequence.
    """
    robot.set_testmode(Toggle.ON)
    robot.set_backlight(Toggle.OFF)
    robot.set_ldsrotation(Toggle.ON)

    robot.request_scan()
    ranges = robot.get_scan_ranges()
    logger.info(f"Scan returned {len(ranges)} ranges")

    robot.set_motors(100, 100, 50)

    robot.get_motors()
    robot.get_analog_sensors()
    robot.get_digital_sensors()
    robot.get_charger()
    logger.info(f"Robot status:\n{robot}")

    robot.exit()


def main(argv=None):
    """
    Main function: opens the link, builds the robot and runs the choreography.
    Returns the process exit status.
    """
    args = parse_args(argv)

    # Initializes logging for the application
    logger = setup_logging("NeatoDriver", logging.DEBUG if args.debug else logging.INFO)

    if args.list_ports:
        for port in list_serial_ports():
            print(port)
        return 0

    overrides = {}
    if args.baud is not None:
        overrides["baudrate"] = args.baud
    if args.timeout is not None:
        overrides["timeout"] = args.timeout
    if args.settle_delay is not None:
        overrides["settle_delay"] = args.settle_delay
    if args.sync_limit is not None:
        overrides["max_sync_lines"] = args.sync_limit
        overrides["max_handshake_lines"] = args.sync_limit

    link = None
    try:
        params = get_robot_parameters(args.robot, overrides)
        if args.simulate:
            logger.info("Using simulated robot")
            link = DeviceSimulator(logger=logger.getChild("simulator"))
        else:
            link = open_serial_link(
                args.port,
                baudrate=params["baudrate"],
                timeout=params["timeout"],
                write_timeout=params["write_timeout"],
                bytesize=params["bytesize"],
                parity=params["parity"],
                stopbits=params["stopbits"]
            )
            logger.info(f"Connected to {args.robot} on {args.port}")

        robot = get_robot(args.robot, link, overrides, logger=logger.getChild(args.robot))
        run_choreography(robot, logger)
    except (NeatoError, ValueError) as e:
        logger.error(f"Robot session failed: {e}", exc_info=args.debug)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130
    finally:
        if link is not None:
            link.close()

    logger.info("Done")
    return 0


if __name__ == "__main__":
    # Entry point to run the main function
    sys.exit(main())
