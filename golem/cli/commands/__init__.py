"""
Pacote de comandos do CLI golem.

Cada arquivo neste diretório implementa um subcomando:
- send_cmd.py → golem send
- history_cmd.py → golem history
- collection_cmd.py → golem collection
- saved_cmd.py → golem saved
- prefs_cmd.py → golem prefs
- serve_cmd.py → golem serve
"""
