"""Host-side model of an earable's audio block pipeline, WAV files, logging, sensors and device logic."""

__version__ = "1.3.0"