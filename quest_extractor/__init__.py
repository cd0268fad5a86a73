"""
Quest step extractor: Quest Helper Java quest classes -> canonical quest JSON.
"""

__version__ = "1.0.0"
