"""
Coding System Constants.

Working subset of the (system URI, code) table consumed by the
transformers. Variable-specific systems live under the CCW variable
namespace so the wire layer can resolve them to their documentation.
"""

from decimal import Decimal

ZERO = Decimal("0")

# =============================================================================
# Namespaces
# =============================================================================

CCW_BASE_URL = "https://bluebutton.cms.gov/resources"
CCW_VARIABLE_URL = f"{CCW_BASE_URL}/variables"
CCW_CODESYSTEM_URL = f"{CCW_BASE_URL}/codesystem"


def ccw_variable(name: str) -> str:
    """Build the coding system URI for a CCW variable."""
    return f"{CCW_VARIABLE_URL}/{name}"


# =============================================================================
# Identifiers & References
# =============================================================================

CODING_SYSTEM_CCW_CLAIM_ID = ccw_variable("clm_id")
CODING_SYSTEM_CCW_CLAIM_GRP_ID = ccw_variable("clm_grp_id")
CODING_SYSTEM_NPI_US = "http://hl7.org/fhir/sid/us-npi"
CODING_SYSTEM_PROVIDER_NUMBER = ccw_variable("prvdr_num")

# =============================================================================
# Claim Header
# =============================================================================

CODING_SYSTEM_CCW_CLAIM_TYPE = ccw_variable("nch_clm_type_cd")
CODING_SYSTEM_CCW_RECORD_ID_CD = ccw_variable("nch_near_line_rec_ident_cd")
CODING_SYSTEM_CCW_CARR_CLINICAL_TRIAL_NUMBER = ccw_variable("clm_clncl_tril_num")
CODING_SYSTEM_CCW_CARR_CARRIER_NUMBER = ccw_variable("carr_num")
CODING_SYSTEM_CCW_CARR_PAYMENT_DENIAL_CD = ccw_variable("carr_clm_pmt_dnl_cd")
CODING_SYSTEM_CCW_PROVIDER_ASSIGNMENT = ccw_variable("carr_clm_prvdr_asgnmt_ind_sw")
CODING_SYSTEM_CCW_INP_PAYMENT_DENIAL_CD = ccw_variable("clm_mdcr_non_pmt_rsn_cd")
CODING_SYSTEM_CCW_CLAIM_SERVICE_CLASSIFICATION_TYPE_CD = ccw_variable("clm_srvc_clsfctn_type_cd")
CODING_SYSTEM_CCW_FACILITY_TYPE_CD = ccw_variable("clm_fac_type_cd")
CODING_SYSTEM_QUERY_CD = ccw_variable("claim_query_cd")
CODING_SYSTEM_FREQUENCY_CD = ccw_variable("clm_freq_cd")
CODING_SYSTEM_PRIMARY_PAYER_CD = ccw_variable("nch_prmry_pyr_cd")
CODING_SYSTEM_PATIENT_DISCHARGE_STATUS_CD = ccw_variable("ptnt_dschrg_stus_cd")
CODING_SYSTEM_PATIENT_STATUS_CD = ccw_variable("nch_ptnt_stus_ind_cd")
CODING_SYSTEM_MCO_PAID_CD = ccw_variable("clm_mco_pd_sw")

CARR_CLAIM_DISPOSITION = "Debit accepted"

# =============================================================================
# Diagnosis & Procedure
# =============================================================================

CODING_SYSTEM_ICD9 = "http://hl7.org/fhir/sid/icd-9-cm"
CODING_SYSTEM_ICD10 = "http://hl7.org/fhir/sid/icd-10"
CODING_SYSTEM_ICD_UNKNOWN = f"{CCW_CODESYSTEM_URL}/icd-unknown"
CODING_SYSTEM_DIAGNOSIS_TYPE = f"{CCW_CODESYSTEM_URL}/diagnosis-type"

# =============================================================================
# Care Team
# =============================================================================

CODING_SYSTEM_CARE_TEAM_ROLE = "http://hl7.org/fhir/claimcareteamrole"
CODING_SYSTEM_CCW_CARR_PROVIDER_SPECIALTY_CD = ccw_variable("prvdr_spclty")
CODING_SYSTEM_CCW_CARR_PROVIDER_PARTICIPATING_CD = ccw_variable("prtcptng_ind_cd")

# =============================================================================
# Money & Financial Categories
# =============================================================================

CODING_SYSTEM_MONEY = "urn:iso:std:iso:4217"
CODING_SYSTEM_MONEY_US = "USD"

CODING_BENEFIT_BALANCE_URL = "http://hl7.org/fhir/benefit-category"
BENEFIT_BALANCE_CATEGORY_MEDICAL = "Medical"
BENEFIT_BALANCE_TYPE = f"{CCW_CODESYSTEM_URL}/benefit-balance"
CODING_SYSTEM_ADJUDICATION_CMS = f"{CCW_CODESYSTEM_URL}/adjudication"

CODED_ADJUDICATION_PAYMENT = "Line NCH Payment Amount"
CODED_ADJUDICATION_PAYMENT_B = "Provider Payment Amount"
CODED_ADJUDICATION_PROVIDER_PAYMENT_AMOUNT = "Revenue Center (Medicare) Provider Payment Amount"
CODED_ADJUDICATION_BENEFICIARY_PAYMENT_AMOUNT = "Beneficiary Payment Amount"
CODED_ADJUDICATION_DEDUCTIBLE = "Beneficiary Deductible Amount"
CODED_ADJUDICATION_PRIMARY_PAYER_PAID_AMOUNT = "Primary Payer Paid Amount"
CODED_ADJUDICATION_LINE_COINSURANCE_AMOUNT = "Line Beneficiary Coinsurance Amount"
CODED_ADJUDICATION_LINE_PRIMARY_PAYER_ALLOWED_CHARGE = "Line Primary Payer Allowed Charge Amount"
CODED_ADJUDICATION_SUBMITTED_CHARGE_AMOUNT = "Submitted Charge Amount"
CODED_ADJUDICATION_ALLOWED_CHARGE = "Allowed Charge Amount"
CODED_ADJUDICATION_LINE_PURCHASE_PRICE_AMOUNT = "Line DME Purchase Price Amount"
CODED_ADJUDICATION_NCH_BENEFICIARY_PART_B_DEDUCTIBLE = "NCH Beneficiary Part B Deductible Amount"
CODED_ADJUDICATION_RATE_AMOUNT = "Revenue Center Rate Amount"
CODED_ADJUDICATION_TOTAL_CHARGE_AMOUNT = "Revenue Center Total Charge Amount"
CODED_ADJUDICATION_NONCOVERED_CHARGE = "Revenue Center Non-Covered Charge Amount"
CODED_ADJUDICATION_BLOOD_DEDUCTIBLE = "Blood Deductible Amount"
CODED_ADJUDICATION_CASH_DEDUCTIBLE = "Cash Deductible Amount"
CODED_ADJUDICATION_WAGE_ADJ_COINSURANCE_AMOUNT = "Wage Adjusted Coinsurance Amount"
CODED_ADJUDICATION_REDUCED_COINSURANCE_AMOUNT = "Reduced Coinsurance Amount"
CODED_ADJUDICATION_1ST_MSP_AMOUNT = "1st Medicare Secondary Payer Paid Amount"
CODED_ADJUDICATION_2ND_MSP_AMOUNT = "2nd Medicare Secondary Payer Paid Amount"
CODED_ADJUDICATION_PATIENT_RESPONSIBILITY_AMOUNT = "Patient Responsibility Amount"
CODED_ADJUDICATION_1ST_ANSI_CD = "Revenue Center 1st ANSI Code"
CODED_ADJUDICATION_2ND_ANSI_CD = "Revenue Center 2nd ANSI Code"
CODED_ADJUDICATION_3RD_ANSI_CD = "Revenue Center 3rd ANSI Code"
CODED_ADJUDICATION_4TH_ANSI_CD = "Revenue Center 4th ANSI Code"
CODED_ADJUDICATION_ANSI_CODES = (
    CODED_ADJUDICATION_1ST_ANSI_CD,
    CODED_ADJUDICATION_2ND_ANSI_CD,
    CODED_ADJUDICATION_3RD_ANSI_CD,
    CODED_ADJUDICATION_4TH_ANSI_CD,
)

CODING_NCH_BENEFIT_BLOOD_DED_AMT_URL = ccw_variable("nch_bene_blood_ddctbl_lblty_am")
CODING_NCH_PROFESSIONAL_CHARGE_URL = ccw_variable("nch_prfnl_cmpnt_chrg_amt")
CODING_NCH_BEN_PART_B_DED_AMT_URL = ccw_variable("nch_bene_ptb_ddctbl_amt")
CODING_NCH_BEN_PART_B_COINSUR_AMT_URL = ccw_variable("nch_bene_ptb_coinsrnc_amt")
CODING_CLAIM_OUTPAT_BEN_PAYMENT_AMT_URL = ccw_variable("clm_op_bene_pmt_amt")
CODING_SYSTEM_UTILIZATION_DAY_COUNT = ccw_variable("clm_utlztn_day_cnt")

# =============================================================================
# Line Items
# =============================================================================

CODING_SYSTEM_FHIR_EOB_ITEM_TYPE = "http://hl7.org/fhir/ValueSet/v3-ActInvoiceGroupCode"
CODED_EOB_ITEM_TYPE_CLINICAL_SERVICES_AND_PRODUCTS = "CSPINV"
CODING_SYSTEM_FHIR_EOB_ITEM_TYPE_SERVICE = ccw_variable("line_cms_type_srvc_cd")
CODING_SYSTEM_FHIR_EOB_ITEM_LOCATION = ccw_variable("line_place_of_srvc_cd")
CODING_SYSTEM_CCW_CARR_PROVIDER_STATE_CD = ccw_variable("prvdr_state_cd")
CODING_SYSTEM_REVENUE_CENTER = ccw_variable("rev_cntr")
CODING_SYSTEM_HCPCS = ccw_variable("hcpcs_cd")
HCPCS_MODIFIER_CODES = (
    ccw_variable("hcpcs_1st_mdfr_cd"),
    ccw_variable("hcpcs_2nd_mdfr_cd"),
    ccw_variable("hcpcs_3rd_mdfr_cd"),
    ccw_variable("hcpcs_4th_mdfr_cd"),
)
CODING_SYSTEM_NDC = "https://www.accessdata.fda.gov/scripts/cder/ndc"
CODING_SYSTEM_NDC_QLFR_CD = ccw_variable("rev_cntr_ndc_qty_qlfr_cd")
CODING_SYSTEM_BETOS = ccw_variable("betos_cd")
CODING_SYSTEM_CCW_PROCESSING_INDICATOR_CD = ccw_variable("line_prcsg_ind_cd")
CODING_SYSTEM_CCW_PAYMENT_80_100_INDICATOR_CD = ccw_variable("line_pmt_80_100_cd")
CODING_SYSTEM_CCW_DEDUCTIBLE_INDICATOR_CD = ccw_variable("line_service_deductible")
CODING_SYSTEM_DEDUCTIBLE_COINSURANCE_CD = ccw_variable("rev_cntr_ddctbl_coinsrnc_cd")
CODING_SYSTEM_PRICING_STATE_CD = ccw_variable("dmerc_line_prcng_state_cd")
CODING_SYSTEM_SUPPLIER_TYPE_CD = ccw_variable("dmerc_line_supplr_type_cd")
CODING_SYSTEM_SCREEN_SAVINGS_AMT = ccw_variable("dmerc_line_scrn_svgs_amt")
CODING_SYSTEM_MTUS_CD = ccw_variable("dmerc_line_mtus_cd")
CODING_SYSTEM_MTUS_COUNT = ccw_variable("dmerc_line_mtus_cnt")

CODING_SYSTEM_CMS_HCT_OR_HGB_TEST_TYPE = ccw_variable("line_hct_hgb_type_cd")
EXTENSION_CMS_HCT_OR_HGB_RESULTS = ccw_variable("line_hct_hgb_rslt_num")
