"""HTTP and other outer interfaces."""
