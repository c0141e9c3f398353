"""Senate committee sync: reconcile the NY Senate committee roster into Webflow CMS."""

__version__ = '0.1.0'
