"""
vIBC operator scripts

- sanity_check: compare the universal channel middleware, dispatcher and
  channel id stored on-chain with the local config file
- switch_clients: (deprecated) flip config.json between the proof and
  sim clients
"""

__version__ = "0.1.0"
