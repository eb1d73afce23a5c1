"""SITE-ATLAS core — location-assessment map layers and competitor analytics."""
