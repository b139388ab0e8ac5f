"""
Couche adaptateurs (implementations concretes des ports).

- file_system.py : parcours du disque
- media/ : sonde pymediainfo et miniatures ffmpeg
- cli/ : commandes typer
"""
