"""Helper factories shared by the test suites."""

import functools
import operator


def make_sentence(body: str) -> str:
    """Wrap ``body`` (the text between '$' and '*') into a checksummed sentence."""
    checksum = functools.reduce(operator.xor, (ord(c) for c in body), 0)
    return f"${body}*{checksum:02X}"


GGA_SENTENCE = "$GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*47"
VTG_SENTENCE = "$GNVTG,054.7,T,034.4,M,005.5,N,010.2,K,A*3B"
