"""
Media app for direct-to-storage image uploads.

This app provides:
- MediaObject model tracking each uploaded image and where it is bound
- Presigned upload credentials for S3-compatible object storage
- Binding, reconciliation and cascade cleanup of entity media
- Asynchronous storage object deletion via Celery
"""
