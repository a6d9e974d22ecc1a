"""Orange Forum: discussion-forum domain core and HTTP surface."""

__version__ = "0.1.0"
