"""
Writers producing the Jekyll tree.

Identifier and attachment-name allocation, document assembly, and the file
writer and attachment downloader used by the export tool.
"""
