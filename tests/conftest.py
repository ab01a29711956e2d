"""
pytest configuration and fixtures for SenML tests.

Provides reusable fixtures for:
- A fixed reference time ("now")
- RFC 8428 example packs
- Hypothesis property-based testing configuration
"""

import os
import sys
from pathlib import Path

import pytest

# Add project paths
sys.path.insert(0, str(Path(__file__).parent.parent / "tools"))

from senml_time import SenMLTime

# Configure Hypothesis profiles
try:
    from hypothesis import settings, Verbosity, Phase

    # Default profile: balanced speed and coverage
    settings.register_profile(
        "default",
        max_examples=100,
        deadline=None,
    )

    # CI profile: more thorough testing
    settings.register_profile(
        "ci",
        max_examples=500,
        deadline=None,
        suppress_health_check=[],
        phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    )

    # Dev profile: fast iteration
    settings.register_profile(
        "dev",
        max_examples=10,
        deadline=None,
    )

    # Debug profile: verbose output
    settings.register_profile(
        "debug",
        max_examples=10,
        verbosity=Verbosity.verbose,
        deadline=None,
    )

    # Load profile from environment
    profile = os.environ.get("HYPOTHESIS_PROFILE", "default")
    settings.load_profile(profile)

except ImportError:
    pass  # Hypothesis not installed


@pytest.fixture
def now():
    """Fixed reference time: Mon Oct 31 16:27:09 UTC 2011 + 0.5 s."""
    return SenMLTime(1320078429, 500_000_000)


@pytest.fixture
def rfc_example():
    """
    Provide the RFC 8428 Section 5.1 example packs by name.

    Usage:
        def test_pack(rfc_example):
            text = rfc_example('multiple_datapoints')
    """
    def load(name: str) -> str:
        return RFC_EXAMPLES[name]
    return load


# RFC 8428 Section 5.1 examples
RFC_EXAMPLES = {
    'single_datapoint': """
        [
         {"n":"urn:dev:ow:10e2073a01080063","u":"Cel","v":23.1}
        ]
    """,
    'multiple_datapoints': """
        [
         {"bn":"urn:dev:ow:10e2073a01080063:","n":"voltage","u":"V","v":120.1},
         {"n":"current","u":"A","v":1.2}
        ]
    """,
    'multiple_datapoints_and_time': """
        [
         {"bn":"urn:dev:ow:10e2073a0108006:","bt":1.276020076001e+09,
          "bu":"A","bver":5,
          "n":"voltage","u":"V","v":120.1},
         {"n":"current","t":-5,"v":1.2},
         {"n":"current","t":-4,"v":1.3},
         {"n":"current","t":-3,"v":1.4},
         {"n":"current","t":-2,"v":1.5},
         {"n":"current","t":-1,"v":1.6},
         {"n":"current","v":1.7}
        ]
    """,
    'multiple_measurements': """
        [
         {"bn":"urn:dev:ow:10e2073a01080063","bt":1.320067464e+09,
          "bu":"%RH","v":20},
         {"u":"lon","v":24.30621},
         {"u":"lat","v":60.07965},
         {"t":60,"v":20.3},
         {"u":"lon","t":60,"v":24.30622},
         {"u":"lat","t":60,"v":60.07965},
         {"t":120,"v":20.7},
         {"u":"lon","t":120,"v":24.30623},
         {"u":"lat","t":120,"v":60.07966},
         {"u":"%EL","t":150,"v":98},
         {"t":180,"v":21.2},
         {"u":"lon","t":180,"v":24.30628},
         {"u":"lat","t":180,"v":60.07967}
        ]
    """,
    'resolved_data': """
        [
         {"n":"urn:dev:ow:10e2073a01080063","u":"%RH","t":1.320067464e+09,"v":20},
         {"n":"urn:dev:ow:10e2073a01080063","u":"lon","t":1.320067464e+09,"v":24.30621},
         {"n":"urn:dev:ow:10e2073a01080063","u":"lat","t":1.320067464e+09,"v":60.07965},
         {"n":"urn:dev:ow:10e2073a01080063","u":"%RH","t":1.320067524e+09,"v":20.3},
         {"n":"urn:dev:ow:10e2073a01080063","u":"lon","t":1.320067524e+09,"v":24.30622},
         {"n":"urn:dev:ow:10e2073a01080063","u":"lat","t":1.320067524e+09,"v":60.07965},
         {"n":"urn:dev:ow:10e2073a01080063","u":"%RH","t":1.320067584e+09,"v":20.7},
         {"n":"urn:dev:ow:10e2073a01080063","u":"lon","t":1.320067584e+09,"v":24.30623},
         {"n":"urn:dev:ow:10e2073a01080063","u":"lat","t":1.320067584e+09,"v":60.07966},
         {"n":"urn:dev:ow:10e2073a01080063","u":"%EL","t":1.320067614e+09,"v":98},
         {"n":"urn:dev:ow:10e2073a01080063","u":"%RH","t":1.320067644e+09,"v":21.2},
         {"n":"urn:dev:ow:10e2073a01080063","u":"lon","t":1.320067644e+09,"v":24.30628},
         {"n":"urn:dev:ow:10e2073a01080063","u":"lat","t":1.320067644e+09,"v":60.07967}
        ]
    """,
    'multiple_datatypes': """
        [
         {"bn":"urn:dev:ow:10e2073a01080063:","n":"temp","u":"Cel","v":23.1},
         {"n":"label","vs":"Machine Room"},
         {"n":"open","vb":false},
         {"n":"nfc-reader","vd":"aGkgCg"}
        ]
    """,
    'collection_of_resources': """
        [
         {"bn":"2001:db8::2/","bt":1.320078429e+09,
          "n":"temperature","u":"Cel","v":25.2},
         {"n":"humidity","u":"%RH","v":30},
         {"bn":"2001:db8::1/","n":"temperature","u":"Cel","v":12.3},
         {"n":"humidity","u":"%RH","v":67}
        ]
    """,
    'setting_actuator': """
        [
         {"bn":"urn:dev:ow:10e2073a01080063:"},
         {"n":"temp","u":"Cel","v":23.1},
         {"n":"heat","u":"/","v":1},
         {"n":"fan","u":"/","v":0}
        ]
    """,
    'lights_on': """
        [
         {"bt":1.320078429e+09,"bu":"/","n":"2001:db8::3","v":1},
         {"n":"2001:db8::4","v":1}
        ]
    """,
    'synchronized_lights_off': """
        [
         {"bt":1.320078429e+09,"bu":"/","n":"2001:db8::3","v":0.5},
         {"n":"2001:db8::4","v":0.5},
         {"n":"2001:db8::3","t":0.1,"v":0},
         {"n":"2001:db8::4","t":0.1,"v":0}
        ]
    """,
}


# Markers for test categorization
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "cli: marks tests that run the command line tools"
    )
