from drf_spectacular.extensions import OpenApiAuthenticationExtension


class RoleJWTAuthenticationScheme(OpenApiAuthenticationExtension):
    target_class = "prism_core.iam.auth.RoleJWTAuthentication"
    name = "BearerOrCookieJWT"

    def get_security_definition(self, auto_schema):
        # Documented as Bearer JWT; the prism_access cookie is accepted too.
        return {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
            "description": (
                "Obtain a token from /api/v1/auth/login/ and send it via "
                "`Authorization: Bearer <token>` or the prism_access cookie."
            ),
        }
