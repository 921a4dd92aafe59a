"""
Posts app: geolocated content that owns uploaded images.

This app provides:
- Record, Ask and Reply models
- Create/edit/delete services wired to the media lifecycle
- Bounding-box map queries
"""
