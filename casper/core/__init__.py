"""Core models shared by every layer of Casper."""
