"""Coupon exceptions.

``CouponNotApplicable`` and its subclasses carry the reason a code cannot
be applied; views report them as ``BAD_REQUEST`` with the message as is.
"""

from __future__ import annotations


class CouponNotFound(Exception):
    """No coupon has this id or code."""


class CouponAlreadyExists(Exception):
    """Another coupon already uses the code (case-insensitive)."""


class InvalidCoupon(Exception):
    """The coupon definition is inconsistent (window or percentage value)."""


class CouponNotApplicable(Exception):
    """Base class for every reason a coupon cannot be applied."""


class CouponInactive(CouponNotApplicable):
    pass


class CouponOutsideWindow(CouponNotApplicable):
    pass


class CouponMinimumNotMet(CouponNotApplicable):
    pass


class CouponUsageLimitReached(CouponNotApplicable):
    pass


class CouponUserLimitReached(CouponNotApplicable):
    pass
