"""
Farm Modules.

Business modules built on the kernel: financial reporting over the journal,
poultry batch KPIs and fixed-asset book value.
"""
