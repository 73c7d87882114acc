# FILE: tests/conftest.py

import pytest
import sys
import os
import logging

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from parser_config import BodySlicing, ParserConfig
from x12_parser import X12Parser

# ==============================================================================
# PYTEST CONFIGURATION & HOOKS
# ==============================================================================

def pytest_configure(config):
    """Configure pytest settings and markers."""
    config.addinivalue_line("markers", "unit: Pure unit tests with no external dependencies.")
    config.addinivalue_line("markers", "integration: Tests that touch the filesystem or run the CLI end to end.")

@pytest.fixture(scope="session", autouse=True)
def setup_test_environment(pytestconfig):
    """Set up test environment with logging configuration."""
    log_level = pytestconfig.getoption("log_cli_level") or "INFO"
    logging.basicConfig(
        level=log_level.upper(),
        format="[%(asctime)s] [%(levelname)s] [%(name)s:%(lineno)d] - %(message)s",
        stream=sys.stdout,
        force=True,
    )
    logging.info(f"Test logging configured with level: {log_level.upper()}")
    yield

# ==============================================================================
# PARSER FIXTURES
# ==============================================================================

@pytest.fixture
def legacy_parser() -> X12Parser:
    return X12Parser(ParserConfig(body_slicing=BodySlicing.LEGACY))

@pytest.fixture
def strict_parser() -> X12Parser:
    return X12Parser(ParserConfig(body_slicing=BodySlicing.STRICT))

# ==============================================================================
# TEST DATA
# ==============================================================================

ISA_SEGMENT = "ISA*00*          *00*          *ZZ*SENDERID       *ZZ*RECEIVERID     *240715*1200*U*00401*000000001*0*P*>~"

@pytest.fixture(scope="session")
def isa_segment() -> str:
    return ISA_SEGMENT

@pytest.fixture(scope="session")
def valid_810_edi_string() -> str:
    """
    A single 810 invoice: 1 Interchange, 1 Functional Group, 1 Transaction Set
    with 5 segments between ST and SE (BIG, N1, IT1, TDS, CTT).
    """
    return f"""
{ISA_SEGMENT}
GS*IN*SENDER*RECEIVER*20240715*1200*1*X*004010~
ST*810*0001~
BIG*20240715*INV1001**PO5001~
N1*BT*ACME CORP*92*1001~
IT1*1*10*EA*12.50**VP*WIDGET~
TDS*12500~
CTT*1~
SE*7*0001~
GE*1*1~
IEA*1*000000001~
""".strip()

@pytest.fixture(scope="session")
def valid_810_edi_bytes(valid_810_edi_string: str) -> bytes:
    return valid_810_edi_string.encode("ascii")

@pytest.fixture(scope="session")
def multiple_groups_edi_string() -> str:
    """
    Contains:
    - 2 Functional Groups
    - Group 1 (control 1): 2 Transaction Sets (0001 with 3 segments between ST/SE, 0002 with 2)
    - Group 2 (control 2): 1 Transaction Set (0003 with 2 segments between ST/SE)
    Written without line breaks.
    """
    return (
        ISA_SEGMENT
        + "GS*IN*SENDER*RECEIVER*20240715*1200*1*X*004010~"
        + "ST*810*0001~BIG*20240715*INV1*~N1*BT*ACME~CTT*1~SE*5*0001~"
        + "ST*810*0002~BIG*20240715*INV2*~CTT*1~SE*4*0002~"
        + "GE*2*1~"
        + "GS*PO*SENDER*RECEIVER*20240715*1200*2*X*004010~"
        + "ST*850*0003~BEG*00*SA*PO1~CTT*1~SE*4*0003~"
        + "GE*1*2~"
        + "IEA*2*000000001~"
    )

@pytest.fixture(scope="session")
def multiple_groups_edi_bytes(multiple_groups_edi_string: str) -> bytes:
    return multiple_groups_edi_string.encode("ascii")

@pytest.fixture
def edi_file(tmp_path, valid_810_edi_bytes):
    """Writes the 810 document to a temporary file and returns its path."""
    path = tmp_path / "sample810.edi"
    path.write_bytes(valid_810_edi_bytes)
    return path
