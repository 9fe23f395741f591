"""waypoint-engine: generated folder tables of contents for markdown vaults.

A folder note containing a trigger token gets a nested bullet list of its
folder's contents, demarcated:
    %% Begin Waypoint %%
    - [[Note]]
    ...
    %% End Waypoint %%

Anything outside the sentinels is preserved untouched.
"""

__version__ = "0.1.0"
