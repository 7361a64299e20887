"""Small general-purpose building blocks: byte buffers, CRC-32C, a min-heap, an array, a linked list and thread hand-off."""

__version__ = "2.0.0"