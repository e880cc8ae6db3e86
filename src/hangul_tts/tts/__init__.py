"""
Synthesis Layer.

    - syllables.py: Practice deck enumeration and export
    - client.py: Supertone HTTP client
    - pacing.py: Minimum interval between request starts
    - storage.py: Clip naming and atomic writes
    - manifest.py: manifest.json schema and writer
"""
