"""Atlaskit design-system codemods."""

from ..codemod.config import ComponentAsRenderChild, ElementMatch, RenameAttribute, RewriteRule
from .registry import CatalogEntry

_AVATAR_RENDER_CHILD = ComponentAsRenderChild(
    attribute="component",
    subject="@atlaskit/avatar component prop",
    reason="Expected the component prop to be a capitalised identifier",
)

AVATAR_19 = CatalogEntry(
    package="@atlaskit/avatar",
    version="19.0.0",
    description="Replace the component prop of Avatar and AvatarItem with a render function child",
    rules=(
        RewriteRule(
            name="avatar-component-prop",
            module="@atlaskit/avatar",
            match=ElementMatch(),
            strategy=_AVATAR_RENDER_CHILD,
        ),
        RewriteRule(
            name="avatar-item-component-prop",
            module="@atlaskit/avatar",
            match=ElementMatch(export="AvatarItem"),
            strategy=_AVATAR_RENDER_CHILD,
        ),
    ),
)

TEXTAREA_4 = CatalogEntry(
    package="@atlaskit/textarea",
    version="4.0.0",
    description="Rename forwardedRef to ref",
    rules=(
        RewriteRule(
            name="textarea-forwarded-ref",
            module="@atlaskit/textarea",
            match=ElementMatch(),
            strategy=RenameAttribute(old="forwardedRef", new="ref"),
        ),
    ),
)

TAG_11 = CatalogEntry(
    package="@atlaskit/tag",
    version="11.0.0",
    description="Rename removeButtonText to removeButtonLabel",
    rules=(
        RewriteRule(
            name="tag-remove-button-label",
            module="@atlaskit/tag",
            match=ElementMatch(),
            strategy=RenameAttribute(old="removeButtonText", new="removeButtonLabel"),
        ),
    ),
)
