"""Proxmox VE API client, response formats and transport."""
