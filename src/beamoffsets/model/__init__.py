"""
The MODEL layer contains pure data structures.
It has NO knowledge of the host application and performs no host calls.
"""
