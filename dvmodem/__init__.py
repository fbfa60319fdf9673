"""Digital voice modem building blocks: ring buffer, Golay and DMR slot type coding, Morse ident, calibration generators and a DMR direct-mode transmitter."""

__version__ = "0.1.0"