FIELDS_REQUIRED = "All fields are required"
USER_EXISTS = "User already exists with this email"
USER_REGISTERED = "User registered successfully"
VERIFY_NUMBER = "Please verify your phone number"
INVALID_NUMBER = "Please enter a valid phone number"
PHONE_EXISTS = "Phone number is already registered"
PHONE_ALREADY_VERIFIED = "Phone number is already verified for this account"
OTP_SENT = "OTP sent successfully"
OTP_DELIVERY_FAILED = "Unable to send OTP, please try again"
ENTER_OTP = "Please enter the OTP"
INVALID_OTP = "Invalid OTP"
PHONE_VERIFICATION = "Phone number verified successfully"
USER_NOT_FOUND = "User not found"
USER_PROFILE = "User profile fetched successfully"
LOGIN_ERROR = "Invalid email or password"
LOGIN_SUCCESS = "Logged in successfully"
NOT_AUTHENTICATED = "Could not validate credentials"
