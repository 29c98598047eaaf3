from decimal import Decimal

D = Decimal

CPP_BASIC_EXEMPTION = D("3500")
CPP_YMPE = D("68500")
CPP_YAMPE = D("73200")

CPP_RATE = D("0.0595")
CPP_MAX_EMPLOYEE = D("3867.50")
CPP2_RATE = D("0.04")
CPP2_MAX_EMPLOYEE = D("188.00")

# Self-employed remit both the employee and employer shares.
CPP_RATE_SELF_EMPLOYED = D("0.119")
CPP_MAX_SELF_EMPLOYED = D("7735.00")
CPP2_RATE_SELF_EMPLOYED = D("0.08")
CPP2_MAX_SELF_EMPLOYED = D("376.00")

# Enhanced portion is a deduction from income; the base portion earns a credit.
CPP_ENHANCED_DEDUCTION = D("838.00")
CPP_BASE_CREDIT_AMOUNT = D("3217.50")

EI_MIE = D("63200")
EI_RATE_EMP = D("0.0166")
EI_MAX_EMPLOYEE = (EI_MIE * EI_RATE_EMP).quantize(D("0.01"))
